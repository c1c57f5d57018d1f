from enum import Enum


class Category(str, Enum):
    ELECTRONICS = "Electronics"
    FASHION = "Fashion"
    HOME = "Home"
    SPORTS = "Sports"
    BOOKS = "Books"


LOW_STOCK_THRESHOLD = 10
CRITICAL_STOCK_THRESHOLD = 5

DEFAULT_RATING = 4.5
MAX_RATING = 5.0

DASHBOARD_TOP_PRODUCTS = 5
DASHBOARD_CRITICAL_PRODUCTS = 5
RECOMMENDATION_TOP_RATED = 6
RECOMMENDATION_BEST_SELLERS = 6
RECOMMENDATION_PER_CATEGORY = 3
RELATED_PRODUCTS_LIMIT = 4

HOME_PATH = "/"
PRODUCT_PATH_TEMPLATE = "/products/{slug}"

# path segments under /products that a product slug would shadow
RESERVED_SLUGS = frozenset({"slugs"})
