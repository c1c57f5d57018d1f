from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.product import ProductRead


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class CatalogStats(_CamelModel):
    total_products: int
    low_stock_products: int
    out_of_stock_products: int
    total_inventory: int
    average_price: float


class DashboardSummary(CatalogStats):
    total_inventory_value: float
    average_inventory: float = 0.0
    out_of_stock_rate: float = 0.0
    top_products: List[ProductRead] = Field(default_factory=list)
    critical_products: List[ProductRead] = Field(default_factory=list)
    low_stock: List[ProductRead] = Field(default_factory=list)
    out_of_stock: List[ProductRead] = Field(default_factory=list)
    products: List[ProductRead] = Field(default_factory=list)


class Recommendations(_CamelModel):
    top_rated: List[ProductRead] = Field(default_factory=list)
    best_sellers: List[ProductRead] = Field(default_factory=list)
    by_category: Dict[str, List[ProductRead]] = Field(default_factory=dict)


class ProductDetail(_CamelModel):
    product: ProductRead
    related: List[ProductRead] = Field(default_factory=list)
    stock_status: str
