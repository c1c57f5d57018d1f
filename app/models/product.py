from sqlalchemy import CheckConstraint, Column, DateTime, Enum, Float, Index, Integer, String, Text

from app.core.constants import DEFAULT_RATING, Category
from app.core.dates import utc_now
from app.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)

    name = Column(String, nullable=False)
    slug = Column(String, nullable=False)
    description = Column(Text, nullable=False)

    price = Column(Float, nullable=False)
    category = Column(
        Enum(
            Category,
            name="product_category",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
    )
    inventory = Column(Integer, nullable=False, default=0)
    image = Column(String, nullable=False)

    rating = Column(Float, nullable=False, default=DEFAULT_RATING)
    reviews = Column(Integer, nullable=False, default=0)

    last_updated = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    __table_args__ = (
        Index("uq_products_slug", "slug", unique=True),
        Index("idx_products_category", "category"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("inventory >= 0", name="ck_products_inventory_non_negative"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_products_rating_range"),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, slug='{self.slug}')>"


__all__ = ["Product"]
