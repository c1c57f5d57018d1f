from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.constants import DEFAULT_RATING, MAX_RATING, RESERVED_SLUGS, Category
from app.core.dates import ensure_utc

REQUIRED_FIELDS = ("name", "slug", "description", "price", "category", "image")


def normalize_slug(value: str) -> str:
    return value.strip().lower()


def _checked_slug(value: str) -> str:
    value = normalize_slug(value)
    if not value:
        raise ValueError("slug must not be blank")
    if value in RESERVED_SLUGS:
        raise ValueError("slug '{}' is reserved".format(value))
    return value


def missing_required_fields(fields) -> List[str]:
    missing = []
    for name in REQUIRED_FIELDS:
        value = fields.get(name)
        if value is None:
            missing.append(name)
        elif isinstance(value, str) and not value.strip():
            missing.append(name)
    return missing


class ProductCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: Category
    inventory: int = Field(0, ge=0)
    image: str = Field(min_length=1)
    rating: float = Field(DEFAULT_RATING, ge=0, le=MAX_RATING)
    reviews: int = Field(0, ge=0)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("slug")
    @classmethod
    def _normalize_slug(cls, value: str) -> str:
        return _checked_slug(value)

    @field_validator("inventory", mode="before")
    @classmethod
    def _default_inventory(cls, value):
        return 0 if value is None else value


class ProductUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    category: Optional[Category] = None
    inventory: Optional[int] = Field(None, ge=0)
    image: Optional[str] = Field(None, min_length=1)
    rating: Optional[float] = Field(None, ge=0, le=MAX_RATING)
    reviews: Optional[int] = Field(None, ge=0)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("slug")
    @classmethod
    def _normalize_slug(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _checked_slug(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProductRead(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: int
    name: str
    slug: str
    description: str
    price: float
    category: Category
    inventory: int
    image: str
    rating: float
    reviews: int
    last_updated: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("last_updated", "created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value):
        return ensure_utc(value)


def serialize_product(product) -> dict:
    return ProductRead.model_validate(product).model_dump(mode="json", by_alias=True)


def serialize_products(products) -> list:
    return [serialize_product(product) for product in products]


class ProductSort(str, Enum):
    RATING = "rating"
    REVIEWS = "reviews"
    INVENTORY = "inventory"
    PRICE = "price"
    NAME = "name"


@dataclass(frozen=True)
class ProductQuery:
    category: Optional[Category] = None
    search: Optional[str] = None
    sort: Optional[ProductSort] = None
    limit: int = 100


__all__ = [
    "REQUIRED_FIELDS",
    "ProductCreate",
    "ProductQuery",
    "ProductRead",
    "ProductSort",
    "ProductUpdate",
    "missing_required_fields",
    "normalize_slug",
    "serialize_product",
    "serialize_products",
]
