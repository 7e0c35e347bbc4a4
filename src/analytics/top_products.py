"""
Top-Products Aggregator

Ranks products by units sold across completed orders.

This read path never fails: any error is logged and reported as an empty
ranking, so callers cannot tell "no sales" from "lookup failed".
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

import structlog

from src.analytics.catalog import ProductCatalog
from src.analytics.schemas import TopProduct
from src.database.models import Order, OrderStatus
from src.database.repositories import StoreHandle

logger = structlog.get_logger(__name__)

UNKNOWN_PRODUCT_NAME = "Unknown Product"


def rank_products(orders: Iterable[Order], limit: int) -> List[Tuple[str, int]]:
    """
    Group order lines by product id and rank by quantity sold.

    Ties on totalSold are ordered by product id ascending.

    Returns:
        Up to `limit` (product_id, total_sold) pairs, best sellers first
    """
    totals: Dict[str, int] = defaultdict(int)
    for order in orders:
        for line in order.products:
            totals[line.product_id] += line.quantity

    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit]


async def get_top_selling_products(store: StoreHandle, limit: int) -> List[TopProduct]:
    """
    Best-selling products with their catalog names.

    Products missing from the catalog are reported as "Unknown Product".
    """
    logger.info("get_top_selling_products called", limit=limit)

    try:
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")

        orders = await store.orders.find_by_status(OrderStatus.COMPLETED)
        ranked = rank_products(orders, limit)
        catalog = await ProductCatalog.load(store, [product_id for product_id, _ in ranked])

        results = []
        for product_id, total_sold in ranked:
            product = catalog.get(product_id)
            results.append(
                TopProduct(
                    product_id=product_id,
                    name=product.name if product else UNKNOWN_PRODUCT_NAME,
                    total_sold=total_sold,
                )
            )

        logger.info("Top-selling products computed", orders=len(orders), returned=len(results))
        return results
    except Exception as e:
        logger.error(
            "Error fetching top-selling products",
            error=str(e),
            error_type=type(e).__name__,
        )
        return []
