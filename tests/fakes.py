"""
In-memory stand-ins for the document store, and the ids used by fixtures
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from bson.binary import Binary

from src.analytics import codec
from src.analytics.dates import parse_timestamp
from src.analytics.errors import StoreUnavailable
from src.database.models import Customer, Order, OrderStatus, Product

CUSTOMER_1 = "3f2b8c1e-5d4a-4e6f-9a7b-1c2d3e4f5a6b"
CUSTOMER_2 = "9c0d1e2f-3a4b-4c5d-8e6f-7a8b9c0d1e2f"
CUSTOMER_3 = "11111111-2222-4333-8444-555555555555"
UNKNOWN_CUSTOMER = "00000000-0000-4000-8000-000000000000"

PRODUCT_1 = "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d"
PRODUCT_2 = "b2c3d4e5-f6a7-4b8c-9d0e-1f2a3b4c5d6e"
PRODUCT_3 = "c3d4e5f6-a7b8-4c9d-8e1f-2a3b4c5d6e7f"
MISSING_PRODUCT = "deadbeef-0000-4000-8000-000000000001"


# =============================================================================
# IN-MEMORY STORE
# =============================================================================

class InMemoryOrderRepository:
    """Order queries evaluated over raw documents, binary keys included"""

    def __init__(self, docs: List[Dict[str, Any]]):
        self.docs = docs

    async def find_by_customer(
        self,
        customer_key: Binary,
        skip: int = 0,
        limit: Optional[int] = None,
        newest_first: bool = False,
    ) -> List[Order]:
        matched = [d for d in self.docs if d.get("customerId") == customer_key]
        if newest_first:
            matched.sort(key=lambda d: d["_id"])
            matched.sort(key=lambda d: parse_timestamp(d["orderDate"]), reverse=True)
        matched = matched[skip:]
        if limit is not None:
            matched = matched[:limit]
        return [Order.model_validate(d) for d in matched]

    async def find_by_status(self, status: OrderStatus) -> List[Order]:
        return [Order.model_validate(d) for d in self.docs if d["status"] == status.value]

    async def find_by_status_between(
        self,
        status: OrderStatus,
        start: datetime,
        end: datetime,
    ) -> List[Order]:
        return [
            Order.model_validate(d)
            for d in self.docs
            if d["status"] == status.value and start <= parse_timestamp(d["orderDate"]) <= end
        ]


class InMemoryProductRepository:
    def __init__(self, docs: List[Dict[str, Any]]):
        self.docs = docs
        self.requested_keys: List[Binary] = []

    async def find_by_keys(self, keys: Sequence[Binary]) -> List[Product]:
        self.requested_keys.extend(keys)
        return [Product.model_validate(d) for d in self.docs if d["_id"] in keys]


class InMemoryCustomerRepository:
    def __init__(self, docs: List[Dict[str, Any]]):
        self.docs = docs

    async def find_by_ids(self, ids: Sequence[str]) -> List[Customer]:
        return [Customer.model_validate(d) for d in self.docs if d["_id"] in ids]


class InMemoryStore:
    def __init__(self, orders=None, customers=None, products=None):
        self.orders = InMemoryOrderRepository(orders or [])
        self.customers = InMemoryCustomerRepository(customers or [])
        self.products = InMemoryProductRepository(products or [])


class UnavailableRepository:
    """Every query fails the way a lost connection does"""

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            raise StoreUnavailable(name, ConnectionError("connection refused"))
        return fail


class UnavailableStore:
    orders = UnavailableRepository()
    customers = UnavailableRepository()
    products = UnavailableRepository()



def make_order(
    customer_id: str,
    order_date: Any,
    total_amount: float,
    products: Any,
    status: str = "completed",
    order_id: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "_id": order_id or f"order-{customer_id[:4]}-{order_date}",
        "customerId": codec.encode(customer_id),
        "products": products,
        "totalAmount": total_amount,
        "orderDate": order_date,
        "status": status,
    }
