from fastapi import APIRouter, Depends

from app.dependencies import get_repository
from app.services.dashboard_service import catalog_stats, dashboard_summary
from app.services.product_repository import ProductRepository

router = APIRouter(tags=["Dashboard"])


@router.get("/stats")
def get_stats(repo: ProductRepository = Depends(get_repository)):
    stats = catalog_stats(repo.all_products())
    return {"success": True, "data": stats.model_dump(mode="json", by_alias=True)}


@router.get("/dashboard")
def get_dashboard(repo: ProductRepository = Depends(get_repository)):
    summary = dashboard_summary(repo.all_products())
    return {"success": True, "data": summary.model_dump(mode="json", by_alias=True)}
