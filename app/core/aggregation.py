from app.core.constants import CRITICAL_STOCK_THRESHOLD, LOW_STOCK_THRESHOLD


def _inventory(product) -> int:
    return product.inventory or 0


def _price(product) -> float:
    return float(product.price or 0.0)


def _category_value(category):
    return getattr(category, "value", category)


def is_out_of_stock(product) -> bool:
    return _inventory(product) == 0


def is_low_stock(product) -> bool:
    return 0 < _inventory(product) < LOW_STOCK_THRESHOLD


def is_critical_stock(product) -> bool:
    return 0 < _inventory(product) < CRITICAL_STOCK_THRESHOLD


def stock_status(product) -> str:
    if is_out_of_stock(product):
        return "out_of_stock"
    if is_critical_stock(product):
        return "critical"
    if is_low_stock(product):
        return "low"
    return "in_stock"


def count_total(products) -> int:
    return len(products)


def count_low_stock(products) -> int:
    return sum(1 for product in products if is_low_stock(product))


def count_out_of_stock(products) -> int:
    return sum(1 for product in products if is_out_of_stock(product))


def low_stock(products) -> list:
    return [product for product in products if is_low_stock(product)]


def out_of_stock(products) -> list:
    return [product for product in products if is_out_of_stock(product)]


def sum_inventory(products) -> int:
    return sum(_inventory(product) for product in products)


def average_price(products) -> float:
    if not products:
        return 0.0
    return sum(_price(product) for product in products) / len(products)


def total_inventory_value(products) -> float:
    return sum(_price(product) * _inventory(product) for product in products)


def average_inventory(products) -> float:
    """Units in stock per product; 0 for an empty catalog."""
    if not products:
        return 0.0
    return sum_inventory(products) / len(products)


def out_of_stock_rate(products) -> float:
    """Share of products with no stock, as a percentage (0-100)."""
    if not products:
        return 0.0
    return count_out_of_stock(products) * 100.0 / len(products)


# sorted() is stable, including with reverse=True, so ties keep collection order.

def _take(items, n) -> list:
    if n is None or n <= 0:
        return []
    return list(items)[:n]


def top_by_inventory(products, n) -> list:
    return _take(sorted(products, key=_inventory, reverse=True), n)


def critical_stock(products, n) -> list:
    critical = [product for product in products if is_critical_stock(product)]
    return _take(sorted(critical, key=_inventory), n)


def top_rated(products, n) -> list:
    return _take(sorted(products, key=lambda product: product.rating or 0.0, reverse=True), n)


def best_sellers(products, n) -> list:
    return _take(sorted(products, key=lambda product: product.reviews or 0, reverse=True), n)


def by_category_top_rated(products, category, n) -> list:
    wanted = _category_value(category)
    in_category = [
        product for product in products if _category_value(product.category) == wanted
    ]
    return top_rated(in_category, n)


__all__ = [
    "average_price",
    "best_sellers",
    "by_category_top_rated",
    "count_low_stock",
    "count_out_of_stock",
    "count_total",
    "critical_stock",
    "is_critical_stock",
    "is_low_stock",
    "is_out_of_stock",
    "low_stock",
    "out_of_stock",
    "stock_status",
    "sum_inventory",
    "top_by_inventory",
    "top_rated",
    "total_inventory_value",
]
