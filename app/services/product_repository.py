import logging
from contextlib import contextmanager
from typing import Mapping, Optional

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.constants import RELATED_PRODUCTS_LIMIT
from app.core.dates import next_stamp, utc_now
from app.core.errors import DuplicateSlug, StoreUnavailable, ValidationError
from app.models.product import Product
from app.schemas.product import (
    ProductCreate,
    ProductQuery,
    ProductSort,
    ProductUpdate,
    missing_required_fields,
    normalize_slug,
)

logger = logging.getLogger(__name__)

_SORT_ORDER = {
    ProductSort.RATING: Product.rating.desc(),
    ProductSort.REVIEWS: Product.reviews.desc(),
    ProductSort.INVENTORY: Product.inventory.desc(),
    ProductSort.PRICE: Product.price.desc(),
    ProductSort.NAME: Product.name.asc(),
}


def _describe_schema_error(exc: SchemaValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid product data"
    error = errors[0]
    location = ".".join(str(part) for part in error.get("loc", ())) or "product"
    return "Invalid value for {}: {}".format(location, error.get("msg", "invalid"))


class ProductRepository:
    """
    Data access for the product catalog.

    Reads return ORM instances; writes validate their input, commit, and raise
    the catalog error types (ValidationError, DuplicateSlug, StoreUnavailable)
    instead of driver exceptions.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_products(self, query: Optional[ProductQuery] = None) -> list[Product]:
        query = query or ProductQuery()
        stmt = select(Product)

        if query.category is not None:
            stmt = stmt.where(Product.category == query.category)

        search = (query.search or "").strip().lower()
        if search:
            pattern = "%{}%".format(search)
            stmt = stmt.where(
                or_(
                    func.lower(Product.name).like(pattern),
                    func.lower(Product.description).like(pattern),
                )
            )

        if query.sort is not None:
            stmt = stmt.order_by(_SORT_ORDER[query.sort], Product.id.asc())
        else:
            stmt = stmt.order_by(Product.id.asc())

        if query.limit and query.limit > 0:
            stmt = stmt.limit(query.limit)

        with self._store_errors("fetch products"):
            return list(self.db.execute(stmt).scalars().all())

    def all_products(self) -> list[Product]:
        with self._store_errors("fetch products"):
            return list(
                self.db.execute(select(Product).order_by(Product.id.asc())).scalars().all()
            )

    def get_by_slug(self, slug: Optional[str]) -> Optional[Product]:
        if not slug:
            return None
        with self._store_errors("fetch product"):
            return (
                self.db.execute(select(Product).where(Product.slug == normalize_slug(slug)))
                .scalars()
                .first()
            )

    def get_by_id(self, product_id) -> Optional[Product]:
        with self._store_errors("fetch product"):
            return self.db.get(Product, product_id)

    def related_products(self, product: Product, limit: int = RELATED_PRODUCTS_LIMIT) -> list[Product]:
        if limit <= 0:
            return []
        stmt = (
            select(Product)
            .where(Product.category == product.category, Product.slug != product.slug)
            .order_by(Product.id.asc())
            .limit(limit)
        )
        with self._store_errors("fetch related products"):
            return list(self.db.execute(stmt).scalars().all())

    def list_slugs(self) -> list[str]:
        with self._store_errors("fetch product slugs"):
            return list(
                self.db.execute(select(Product.slug).order_by(Product.id.asc())).scalars().all()
            )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, fields: Mapping) -> Product:
        fields = dict(fields or {})
        missing = missing_required_fields(fields)
        if missing:
            raise ValidationError("Missing required fields: {}".format(", ".join(missing)))
        try:
            data = ProductCreate.model_validate(fields)
        except SchemaValidationError as exc:
            raise ValidationError(_describe_schema_error(exc)) from exc

        with self._store_errors("create product"):
            if self.get_by_slug(data.slug) is not None:
                raise DuplicateSlug()

            stamp = utc_now()
            product = Product(
                **data.model_dump(),
                last_updated=stamp,
                created_at=stamp,
                updated_at=stamp,
            )
            self.db.add(product)
            self._commit()
            self.db.refresh(product)

        logger.info("Created product %s (id=%s).", product.slug, product.id)
        return product

    def update(self, product_id, fields: Mapping) -> Optional[Product]:
        try:
            changes = ProductUpdate.model_validate(dict(fields or {})).changes()
        except SchemaValidationError as exc:
            raise ValidationError(_describe_schema_error(exc)) from exc

        with self._store_errors("update product"):
            product = self.get_by_id(product_id)
            if product is None:
                return None

            # slug changes are not re-checked here; the unique index rejects collisions
            for key, value in changes.items():
                setattr(product, key, value)

            stamp = next_stamp(product.last_updated)
            product.last_updated = stamp
            product.updated_at = stamp
            self._commit()
            self.db.refresh(product)

        logger.info(
            "Updated product %s (id=%s): %s.",
            product.slug,
            product.id,
            ", ".join(sorted(changes)) or "no field changes",
        )
        return product

    def delete(self, product_id) -> bool:
        with self._store_errors("delete product"):
            product = self.get_by_id(product_id)
            if product is None:
                return False
            slug = product.slug
            self.db.delete(product)
            self._commit()

        logger.info("Deleted product %s (id=%s).", slug, product_id)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if "slug" in str(exc.orig).lower():
                raise DuplicateSlug() from exc
            raise ValidationError("Product violates a storage constraint") from exc

    @contextmanager
    def _store_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Product store failure (%s): %s", action, exc)
            raise StoreUnavailable("Failed to {}".format(action)) from exc


__all__ = ["ProductRepository"]
