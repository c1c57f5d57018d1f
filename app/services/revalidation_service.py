import logging
import threading
from datetime import datetime
from typing import Optional

from app.core.constants import HOME_PATH, PRODUCT_PATH_TEMPLATE
from app.core.dates import utc_now
from app.schemas.product import normalize_slug

logger = logging.getLogger(__name__)


class PageRevalidator:
    """
    Remembers when each derived page was last invalidated.

    A rendering layer compares its own render time against
    last_revalidated(path) to decide whether a cached page is stale.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._revalidated: dict[str, datetime] = {}

    def revalidate(self, *paths: str) -> list[str]:
        stamp = utc_now()
        with self._lock:
            for path in paths:
                self._revalidated[path] = stamp
        logger.info("Revalidation triggered for %s.", ", ".join(paths))
        return list(paths)

    def revalidate_product(self, slug: str) -> list[str]:
        return self.revalidate(product_path(slug), HOME_PATH)

    def last_revalidated(self, path: str) -> Optional[datetime]:
        with self._lock:
            return self._revalidated.get(path)


def product_path(slug: str) -> str:
    return PRODUCT_PATH_TEMPLATE.format(slug=normalize_slug(slug))


__all__ = ["PageRevalidator", "product_path"]
