from app.services.dashboard_service import catalog_stats, dashboard_summary
from app.services.product_repository import ProductRepository
from app.services.recommendation_service import recommendations
from app.services.revalidation_service import PageRevalidator

__all__ = [
    "PageRevalidator",
    "ProductRepository",
    "catalog_stats",
    "dashboard_summary",
    "recommendations",
]
