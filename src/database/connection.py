"""
Document Store Connection Management

Async MongoDB client lifecycle, health checks, and graceful shutdown.

The store is an explicit value: the API layer opens one at startup, hands it
to every aggregator call, and closes it at shutdown. Nothing here is global.
"""

import time
from typing import Optional

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from src.analytics.errors import StoreUnavailable
from src.config import DatabaseSettings, get_settings
from src.database.repositories import (
    MongoCustomerRepository,
    MongoOrderRepository,
    MongoProductRepository,
)

logger = structlog.get_logger(__name__)


class DocumentStore:
    """
    Handle on the order-management database.

    Example:
        async with DocumentStore() as store:
            summary = await get_customer_spending(store, customer_id)
    """

    def __init__(self, settings: Optional[DatabaseSettings] = None):
        self.settings = settings or get_settings().database
        self._client: Optional[AsyncMongoClient] = None
        self._db: Optional[AsyncDatabase] = None
        self._orders: Optional[MongoOrderRepository] = None
        self._customers: Optional[MongoCustomerRepository] = None
        self._products: Optional[MongoProductRepository] = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> "DocumentStore":
        """
        Open the client and verify the server answers a ping.

        Subtype-4 binaries are left as `bson.Binary` (no uuidRepresentation),
        so binary keys reach the codec untouched.

        Raises:
            StoreUnavailable: If the server cannot be reached
        """
        if self._client is not None:
            logger.warning("Document store already connected")
            return self

        client = AsyncMongoClient(
            self.settings.uri,
            tz_aware=True,
            timeoutMS=self.settings.timeout_ms,
            serverSelectionTimeoutMS=self.settings.server_selection_timeout_ms,
            maxPoolSize=self.settings.max_pool_size,
            appname=self.settings.app_name,
        )

        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            logger.error("Failed to connect to document store", error=str(e))
            await client.close()
            raise StoreUnavailable("connect", e) from e

        db = client[self.settings.database]
        self._client = client
        self._db = db
        self._orders = MongoOrderRepository(db[self.settings.orders_collection])
        self._customers = MongoCustomerRepository(db[self.settings.customers_collection])
        self._products = MongoProductRepository(db[self.settings.products_collection])

        logger.info("Document store connection established", database=self.settings.database)
        return self

    async def close(self) -> None:
        """Close the client and drop the repositories"""
        if self._client is not None:
            await self._client.close()
            self._client = None
            self._db = None
            self._orders = self._customers = self._products = None
            logger.info("Document store connection closed")

    async def __aenter__(self) -> "DocumentStore":
        return await self.connect()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _require(self, repository):
        if repository is None:
            raise RuntimeError("Document store not connected. Call connect() first.")
        return repository

    @property
    def database(self) -> AsyncDatabase:
        return self._require(self._db)

    @property
    def orders(self) -> MongoOrderRepository:
        return self._require(self._orders)

    @property
    def customers(self) -> MongoCustomerRepository:
        return self._require(self._customers)

    @property
    def products(self) -> MongoProductRepository:
        return self._require(self._products)

    async def health(self) -> dict:
        """
        Check store health.

        Returns:
            dict: Health status with latency information
        """
        if self._client is None:
            return {"status": "unhealthy", "error": "not connected"}

        try:
            start = time.perf_counter()
            await self._client.admin.command("ping")
            latency_ms = (time.perf_counter() - start) * 1000
            return {
                "status": "healthy",
                "latency_ms": round(latency_ms, 2),
                "database": self.settings.database,
            }
        except PyMongoError as e:
            return {
                "status": "unhealthy",
                "error": str(e),
            }
