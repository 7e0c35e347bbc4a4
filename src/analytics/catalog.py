"""
Product catalog join by codec equality.

Line items carry product ids as strings while the catalog is keyed by
subtype-4 binaries, so both sides meet on (subtype, raw bytes).
"""

from typing import Dict, Iterable, List, Optional

import structlog
from bson.binary import Binary

from src.analytics import codec
from src.analytics.errors import InvalidUuidFormat
from src.database.models import Product
from src.database.repositories import StoreHandle

logger = structlog.get_logger(__name__)


class ProductCatalog:
    """In-memory index of the products touched by one query"""

    def __init__(self, products: Iterable[Product]):
        self._by_key: Dict[tuple, Product] = {codec.key_of(p.key): p for p in products}

    def __len__(self) -> int:
        return len(self._by_key)

    @classmethod
    async def load(cls, store: StoreHandle, product_ids: Iterable[str]) -> "ProductCatalog":
        """Fetch every product whose encoded id appears in `product_ids`"""
        keys: List[Binary] = []
        seen = set()
        for product_id in product_ids:
            try:
                key = codec.encode(product_id)
            except InvalidUuidFormat:
                logger.debug("Skipping product id that is not a UUID", product_id=product_id)
                continue
            if codec.key_of(key) not in seen:
                seen.add(codec.key_of(key))
                keys.append(key)

        products = await store.products.find_by_keys(keys)
        return cls(products)

    def get(self, product_id: str) -> Optional[Product]:
        """Product matching `product_id`, or None. Never raises."""
        try:
            key = codec.encode(product_id)
        except InvalidUuidFormat:
            return None
        return self._by_key.get(codec.key_of(key))
