"""
Collection Repositories

One repository per collection. Each issues native MongoDB filters and
aggregation stages only; UUID encoding and product-list parsing happen in
this process, never as JavaScript executed by the server.

Availability failures (connection loss, server selection or operation
timeouts) are translated into `StoreUnavailable` here, at the store boundary.
"""

from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Sequence

import structlog
from bson.binary import Binary
from pymongo import ASCENDING, DESCENDING
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import ConnectionFailure, ExecutionTimeout, PyMongoError

from src.analytics.errors import StoreUnavailable
from src.database.models import Customer, Order, OrderStatus, Product

logger = structlog.get_logger(__name__)


# =============================================================================
# INTERFACES
# =============================================================================

class OrderRepository(Protocol):
    async def find_by_customer(
        self,
        customer_key: Binary,
        skip: int = 0,
        limit: Optional[int] = None,
        newest_first: bool = False,
    ) -> List[Order]: ...

    async def find_by_status(self, status: OrderStatus) -> List[Order]: ...

    async def find_by_status_between(
        self,
        status: OrderStatus,
        start: datetime,
        end: datetime,
    ) -> List[Order]: ...


class ProductRepository(Protocol):
    async def find_by_keys(self, keys: Sequence[Binary]) -> List[Product]: ...


class CustomerRepository(Protocol):
    async def find_by_ids(self, ids: Sequence[str]) -> List[Customer]: ...


class StoreHandle(Protocol):
    """What the aggregators need from a store: one repository per collection"""
    orders: OrderRepository
    customers: CustomerRepository
    products: ProductRepository


# =============================================================================
# MONGODB IMPLEMENTATIONS
# =============================================================================

def _is_unavailable(error: PyMongoError) -> bool:
    return isinstance(error, (ConnectionFailure, ExecutionTimeout)) or error.timeout


async def run_query(
    operation: str,
    query: Callable[[], Awaitable[List[Dict[str, Any]]]],
) -> List[Dict[str, Any]]:
    """
    Run a store query, mapping availability failures to StoreUnavailable.

    Other driver errors (bad query, authorization) propagate unchanged.
    """
    try:
        docs = await query()
    except PyMongoError as e:
        logger.error(
            "Store query failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
        )
        if _is_unavailable(e):
            raise StoreUnavailable(operation, e) from e
        raise

    logger.debug("Store query completed", operation=operation, documents=len(docs))
    return docs


class MongoOrderRepository:
    """Queries over the orders collection"""

    def __init__(self, collection: AsyncCollection):
        self._collection = collection

    async def find_by_customer(
        self,
        customer_key: Binary,
        skip: int = 0,
        limit: Optional[int] = None,
        newest_first: bool = False,
    ) -> List[Order]:
        """
        Orders whose binary customerId equals `customer_key`.

        Newest-first ordering sorts on orderDate converted with $toDate, so
        string-dated legacy rows interleave with BSON dates by value instead
        of sorting after all of them.
        """
        pipeline: List[Dict[str, Any]] = [{"$match": {"customerId": customer_key}}]
        if newest_first:
            pipeline += [
                {"$addFields": {"orderDateValue": {"$toDate": "$orderDate"}}},
                {"$sort": {"orderDateValue": DESCENDING, "_id": ASCENDING}},
            ]
        if skip:
            pipeline.append({"$skip": skip})
        if limit is not None:
            pipeline.append({"$limit": limit})
        if newest_first:
            pipeline.append({"$project": {"orderDateValue": 0}})

        async def query():
            cursor = await self._collection.aggregate(pipeline)
            return await cursor.to_list()

        docs = await run_query("orders.find_by_customer", query)
        return [Order.model_validate(doc) for doc in docs]

    async def find_by_status(self, status: OrderStatus) -> List[Order]:
        async def query():
            return await self._collection.find({"status": status.value}).to_list()

        docs = await run_query("orders.find_by_status", query)
        return [Order.model_validate(doc) for doc in docs]

    async def find_by_status_between(
        self,
        status: OrderStatus,
        start: datetime,
        end: datetime,
    ) -> List[Order]:
        """
        Orders with the given status and orderDate in [start, end].

        orderDate is converted with $toDate first because legacy rows store
        it as a string.
        """
        pipeline = [
            {"$match": {"status": status.value}},
            {"$addFields": {"orderDateValue": {"$toDate": "$orderDate"}}},
            {"$match": {"orderDateValue": {"$gte": start, "$lte": end}}},
            {"$project": {"orderDateValue": 0}},
        ]

        async def query():
            cursor = await self._collection.aggregate(pipeline)
            return await cursor.to_list()

        docs = await run_query("orders.find_by_status_between", query)
        return [Order.model_validate(doc) for doc in docs]


class MongoProductRepository:
    """Lookups against the products catalog"""

    def __init__(self, collection: AsyncCollection):
        self._collection = collection

    async def find_by_keys(self, keys: Sequence[Binary]) -> List[Product]:
        if not keys:
            return []

        async def query():
            return await self._collection.find({"_id": {"$in": list(keys)}}).to_list()

        docs = await run_query("products.find_by_keys", query)
        return [Product.model_validate(doc) for doc in docs]


class MongoCustomerRepository:
    """Lookups against the customers collection"""

    def __init__(self, collection: AsyncCollection):
        self._collection = collection

    async def find_by_ids(self, ids: Sequence[str]) -> List[Customer]:
        if not ids:
            return []

        async def query():
            return await self._collection.find({"_id": {"$in": list(ids)}}).to_list()

        docs = await run_query("customers.find_by_ids", query)
        return [Customer.model_validate(doc) for doc in docs]
