from fastapi import APIRouter, Depends

from app.dependencies import get_repository
from app.services.product_repository import ProductRepository
from app.services.recommendation_service import recommendations

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


@router.get("")
def get_recommendations(repo: ProductRepository = Depends(get_repository)):
    picks = recommendations(repo.all_products())
    return {"success": True, "data": picks.model_dump(mode="json", by_alias=True)}
