from app.core import aggregation
from app.core.constants import (
    RECOMMENDATION_BEST_SELLERS,
    RECOMMENDATION_PER_CATEGORY,
    RECOMMENDATION_TOP_RATED,
    Category,
)
from app.schemas.product import ProductRead
from app.schemas.stats import Recommendations


def _read_all(products):
    return [ProductRead.model_validate(product) for product in products]


def recommendations(
    products,
    top_rated_n: int = RECOMMENDATION_TOP_RATED,
    best_sellers_n: int = RECOMMENDATION_BEST_SELLERS,
    per_category_n: int = RECOMMENDATION_PER_CATEGORY,
) -> Recommendations:
    """Top rated, most reviewed, and the best rated few of every category."""
    products = list(products)
    by_category = {
        category.value: _read_all(
            aggregation.by_category_top_rated(products, category, per_category_n)
        )
        for category in Category
    }
    return Recommendations(
        top_rated=_read_all(aggregation.top_rated(products, top_rated_n)),
        best_sellers=_read_all(aggregation.best_sellers(products, best_sellers_n)),
        by_category=by_category,
    )


__all__ = ["recommendations"]
