from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status

from app.core.aggregation import stock_status
from app.core.constants import RELATED_PRODUCTS_LIMIT, Category
from app.core.errors import NotFound
from app.dependencies import get_repository, get_revalidator, require_admin
from app.schemas.product import ProductQuery, ProductRead, ProductSort, serialize_product, serialize_products
from app.schemas.stats import ProductDetail
from app.services.product_repository import ProductRepository
from app.services.revalidation_service import PageRevalidator

router = APIRouter(prefix="/products", tags=["Products"])


def _get_or_404(repo: ProductRepository, slug: str):
    product = repo.get_by_slug(slug)
    if product is None:
        raise NotFound()
    return product


@router.get("")
def list_products(
    request: Request,
    category: Optional[str] = Query(None, description="Electronics | Fashion | Home | Sports | Books"),
    limit: Optional[int] = Query(None, ge=0, description="Max records to return; 0 for no limit"),
    search: Optional[str] = Query(None, description="Match against name or description"),
    sort: Optional[ProductSort] = Query(None, description="Optional ordering"),
    repo: ProductRepository = Depends(get_repository),
):
    category_filter = None
    if category is not None and category.strip():
        try:
            category_filter = Category(category.strip())
        except ValueError:
            # no product can carry a category outside the fixed set
            return {"success": True, "data": [], "count": 0}

    query = ProductQuery(
        category=category_filter,
        search=search,
        sort=sort,
        limit=request.app.state.settings.PRODUCT_LIST_LIMIT if limit is None else limit,
    )
    data = serialize_products(repo.list_products(query))
    return {"success": True, "data": data, "count": len(data)}


@router.get("/slugs")
def list_product_slugs(repo: ProductRepository = Depends(get_repository)):
    slugs = repo.list_slugs()
    return {"success": True, "data": slugs, "count": len(slugs)}


@router.get("/{slug}")
def get_product(slug: str, repo: ProductRepository = Depends(get_repository)):
    product = _get_or_404(repo, slug)
    return {"success": True, "data": serialize_product(product)}


@router.get("/{slug}/detail")
def get_product_detail(
    slug: str,
    limit: int = Query(RELATED_PRODUCTS_LIMIT, ge=0, le=50, description="Max related products"),
    repo: ProductRepository = Depends(get_repository),
):
    product = _get_or_404(repo, slug)
    detail = ProductDetail(
        product=ProductRead.model_validate(product),
        related=[ProductRead.model_validate(item) for item in repo.related_products(product, limit)],
        stock_status=stock_status(product),
    )
    return {"success": True, "data": detail.model_dump(mode="json", by_alias=True)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    _auth=Depends(require_admin),
    payload: dict[str, Any] = Body(...),
    repo: ProductRepository = Depends(get_repository),
    revalidator: PageRevalidator = Depends(get_revalidator),
):
    product = repo.create(payload)
    revalidator.revalidate_product(product.slug)
    return {"success": True, "data": serialize_product(product)}


@router.put("/{slug}")
def update_product(
    slug: str,
    _auth=Depends(require_admin),
    payload: dict[str, Any] = Body(...),
    repo: ProductRepository = Depends(get_repository),
    revalidator: PageRevalidator = Depends(get_revalidator),
):
    product = _get_or_404(repo, slug)
    previous_slug = product.slug
    updated = repo.update(product.id, payload)
    if updated is None:
        raise NotFound()

    revalidator.revalidate_product(updated.slug)
    if updated.slug != previous_slug:
        revalidator.revalidate_product(previous_slug)
    return {"success": True, "data": serialize_product(updated)}


@router.delete("/{slug}")
def delete_product(
    slug: str,
    _auth=Depends(require_admin),
    repo: ProductRepository = Depends(get_repository),
    revalidator: PageRevalidator = Depends(get_revalidator),
):
    product = _get_or_404(repo, slug)
    if not repo.delete(product.id):
        raise NotFound()
    revalidator.revalidate_product(slug)
    return {"success": True, "message": "Product deleted successfully"}


@router.post("/{slug}/revalidate")
def revalidate_product(
    slug: str,
    _auth=Depends(require_admin),
    revalidator: PageRevalidator = Depends(get_revalidator),
):
    paths = revalidator.revalidate_product(slug)
    return {"success": True, "message": "Revalidation triggered", "paths": paths}


__all__ = ["router"]
