import importlib

from app.models.product import Product


def import_all_models() -> None:
    for module_name in ("app.models.product",):
        importlib.import_module(module_name)


__all__ = ["Product", "import_all_models"]
