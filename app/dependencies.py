from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.errors import Unauthorized
from app.database.session import get_db
from app.services.product_repository import ProductRepository
from app.services.revalidation_service import PageRevalidator


def get_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


def get_revalidator(request: Request) -> PageRevalidator:
    return request.app.state.revalidator


def require_admin(request: Request) -> None:
    settings = request.app.state.settings
    checker = request.app.state.credential_checker
    if not checker.verify(request.headers.get(settings.ADMIN_KEY_HEADER)):
        raise Unauthorized()


__all__ = ["get_db", "get_repository", "get_revalidator", "require_admin"]
