"""
Customer-Orders Paginator

A page of one customer's orders, newest first, each joined with the
customer's identity fields.
"""

from typing import Dict, List, Optional

import structlog

from src.analytics import codec
from src.analytics.dates import to_iso_string
from src.analytics.schemas import CustomerRef, OrderLineView, OrderView
from src.config import get_settings
from src.database.models import Customer, Order
from src.database.repositories import StoreHandle

logger = structlog.get_logger(__name__)


def to_order_view(order: Order, customer: Optional[Customer]) -> OrderView:
    return OrderView(
        id=order.id,
        order_date=to_iso_string(order.order_date),
        total_amount=order.total_amount,
        status=order.status.value,
        products=[
            OrderLineView(
                product_id=line.product_id,
                quantity=line.quantity,
                price_at_purchase=line.price_at_purchase,
            )
            for line in order.products
        ],
        customer=(
            CustomerRef(id=customer.id, name=customer.name, email=customer.email)
            if customer
            else None
        ),
    )


async def get_customer_orders(
    store: StoreHandle,
    customer_id: str,
    page: int = 1,
    limit: Optional[int] = None,
) -> List[OrderView]:
    """
    Page `page` of the customer's orders sorted by orderDate descending.

    Args:
        store: Document store handle
        customer_id: Customer UUID string
        page: 1-based page number
        limit: Orders per page, defaults to ANALYTICS_DEFAULT_PAGE_SIZE

    Raises:
        ValueError: If page or limit is below 1
        InvalidUuidFormat: If customer_id is not a UUID
        StoreUnavailable: If the store cannot be reached
    """
    if limit is None:
        limit = get_settings().analytics.default_page_size
    if page < 1 or limit < 1:
        raise ValueError(f"page and limit must be positive, got page={page} limit={limit}")

    logger.info("get_customer_orders called", customer_id=customer_id, page=page, limit=limit)

    try:
        customer_key = codec.encode(customer_id)
        orders = await store.orders.find_by_customer(
            customer_key,
            skip=(page - 1) * limit,
            limit=limit,
            newest_first=True,
        )

        # Customers are keyed by plain strings, the decoded binary matches directly
        owner_ids = sorted({order.customer_id for order in orders})
        customers: Dict[str, Customer] = {
            customer.id: customer
            for customer in await store.customers.find_by_ids(owner_ids)
        }

        views = [to_order_view(order, customers.get(order.customer_id)) for order in orders]
        logger.info("Customer orders retrieved", customer_id=customer_id, count=len(views))
        return views
    except Exception as e:
        logger.error(
            "Error in get_customer_orders",
            customer_id=customer_id,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
