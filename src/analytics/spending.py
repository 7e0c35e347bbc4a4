"""
Spending Aggregator

Per-customer totals over every order the customer placed, pending ones
included.
"""

import structlog

from src.analytics import codec
from src.analytics.dates import to_iso_string
from src.analytics.schemas import CustomerSpending
from src.database.repositories import StoreHandle

logger = structlog.get_logger(__name__)


async def get_customer_spending(store: StoreHandle, customer_id: str) -> CustomerSpending:
    """
    Sum, mean and latest date of a customer's orders.

    Args:
        store: Document store handle
        customer_id: Customer UUID string

    Returns:
        CustomerSpending: zeros and a null lastOrderDate when the customer
        has no orders

    Raises:
        InvalidUuidFormat: If customer_id is not a UUID
        StoreUnavailable: If the store cannot be reached
    """
    logger.info("get_customer_spending called", customer_id=customer_id)

    customer_key = codec.encode(customer_id)
    orders = await store.orders.find_by_customer(customer_key)

    if not orders:
        logger.info("No orders found for customer", customer_id=customer_id)
        return CustomerSpending(customer_id=customer_id)

    total_spent = sum(order.total_amount for order in orders)
    last_order_date = max(order.order_date for order in orders)

    summary = CustomerSpending(
        customer_id=customer_id,
        total_spent=total_spent,
        average_order_value=total_spent / len(orders),
        last_order_date=to_iso_string(last_order_date),
    )
    logger.debug("Customer spending computed", customer_id=customer_id, orders=len(orders))
    return summary
