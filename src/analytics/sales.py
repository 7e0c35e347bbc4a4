"""
Sales Analytics Aggregator

Revenue totals for completed orders in a date window, plus revenue per
product category.

The two figures come from different fields: totalRevenue sums
`totalAmount`, the breakdown sums `quantity * priceAtPurchase` of each line.
They are reported as stored and are not reconciled.
"""

from collections import defaultdict
from typing import Dict, Iterable, List

import structlog

from src.analytics.catalog import ProductCatalog
from src.analytics.dates import DateLike, parse_timestamp
from src.analytics.schemas import CategoryRevenue, SalesAnalytics
from src.database.models import Order, OrderStatus
from src.database.repositories import StoreHandle

logger = structlog.get_logger(__name__)


def category_breakdown(orders: Iterable[Order], catalog: ProductCatalog) -> List[CategoryRevenue]:
    """
    Revenue per category at purchase-time prices.

    Lines whose product is not in the catalog are left out.
    """
    revenue: Dict[str, float] = defaultdict(float)
    for order in orders:
        for line in order.products:
            product = catalog.get(line.product_id)
            if product is None:
                continue
            revenue[product.category] += line.line_total

    rows = sorted(revenue.items(), key=lambda item: (-item[1], item[0]))
    return [CategoryRevenue(category=category, revenue=total) for category, total in rows]


async def get_sales_analytics(
    store: StoreHandle,
    start_date: DateLike,
    end_date: DateLike,
) -> SalesAnalytics:
    """
    Sales analytics for completed orders dated within [start_date, end_date].

    Args:
        store: Document store handle
        start_date: Inclusive lower bound (ISO-8601 string, date or datetime)
        end_date: Inclusive upper bound

    Raises:
        InvalidDateFormat: If a bound cannot be parsed
        StoreUnavailable: If the store cannot be reached
    """
    start = parse_timestamp(start_date)
    end = parse_timestamp(end_date)
    logger.info("get_sales_analytics called", start_date=start.isoformat(), end_date=end.isoformat())

    orders = await store.orders.find_by_status_between(OrderStatus.COMPLETED, start, end)
    if not orders:
        logger.info("No completed orders in range")
        return SalesAnalytics()

    total_revenue = sum(order.total_amount for order in orders)

    product_ids = {line.product_id for order in orders for line in order.products}
    catalog = await ProductCatalog.load(store, product_ids)
    breakdown = category_breakdown(orders, catalog)

    logger.info(
        "Sales analytics computed",
        completed_orders=len(orders),
        total_revenue=total_revenue,
        categories=len(breakdown),
    )
    return SalesAnalytics(
        total_revenue=total_revenue,
        completed_orders=len(orders),
        category_breakdown=breakdown,
    )
