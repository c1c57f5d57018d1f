from app.core import aggregation
from app.core.constants import DASHBOARD_CRITICAL_PRODUCTS, DASHBOARD_TOP_PRODUCTS
from app.schemas.product import ProductRead
from app.schemas.stats import CatalogStats, DashboardSummary


def _read_all(products):
    return [ProductRead.model_validate(product) for product in products]


def _stats_fields(products):
    return {
        "total_products": aggregation.count_total(products),
        "low_stock_products": aggregation.count_low_stock(products),
        "out_of_stock_products": aggregation.count_out_of_stock(products),
        "total_inventory": aggregation.sum_inventory(products),
        "average_price": aggregation.average_price(products),
    }


def catalog_stats(products) -> CatalogStats:
    return CatalogStats(**_stats_fields(products))


def dashboard_summary(
    products,
    top_n: int = DASHBOARD_TOP_PRODUCTS,
    critical_n: int = DASHBOARD_CRITICAL_PRODUCTS,
) -> DashboardSummary:
    products = list(products)
    return DashboardSummary(
        **_stats_fields(products),
        total_inventory_value=aggregation.total_inventory_value(products),
        average_inventory=aggregation.average_inventory(products),
        out_of_stock_rate=aggregation.out_of_stock_rate(products),
        top_products=_read_all(aggregation.top_by_inventory(products, top_n)),
        critical_products=_read_all(aggregation.critical_stock(products, critical_n)),
        low_stock=_read_all(aggregation.low_stock(products)),
        out_of_stock=_read_all(aggregation.out_of_stock(products)),
        products=_read_all(products),
    )


__all__ = ["catalog_stats", "dashboard_summary"]
