"""
Test Suite Configuration
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

import pytest

from fakes import (
    CUSTOMER_1,
    CUSTOMER_2,
    CUSTOMER_3,
    PRODUCT_1,
    PRODUCT_2,
    PRODUCT_3,
    InMemoryStore,
    UnavailableStore,
    make_order,
)
from src.analytics import codec
from src.config import Settings


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        app_env="testing",
        debug=True,
    )


@pytest.fixture
def product_docs() -> List[Dict[str, Any]]:
    return [
        {"_id": codec.encode(PRODUCT_1), "name": "Wireless Mouse", "category": "Electronics", "price": 22.0, "stock": 100},
        {"_id": codec.encode(PRODUCT_2), "name": "Field Guide", "category": "Books", "price": 45.0, "stock": 12},
        {"_id": codec.encode(PRODUCT_3), "name": "Yoga Mat", "category": "Sports", "price": 3.5, "stock": 40},
    ]


@pytest.fixture
def customer_docs() -> List[Dict[str, Any]]:
    return [
        {
            "_id": CUSTOMER_1,
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "age": 36,
            "location": "London",
            "gender": "Female",
        },
    ]


@pytest.fixture
def order_docs() -> List[Dict[str, Any]]:
    """
    CUSTOMER_1: two completed orders (100 on 2024-01-01, 50 on 2024-01-10),
    the second stored with the legacy string product list.
    CUSTOMER_2: one pending order.
    """
    return [
        make_order(
            CUSTOMER_1,
            datetime(2024, 1, 1),
            100.0,
            [
                {"productId": PRODUCT_1, "quantity": 3, "priceAtPurchase": 20},
                {"productId": PRODUCT_2, "quantity": 1, "priceAtPurchase": 40},
            ],
            order_id="6e1c0c4e-8f53-4c1e-9d2b-1a2b3c4d5e01",
        ),
        make_order(
            CUSTOMER_1,
            "2024-01-10T00:00:00.000Z",
            50.0,
            f"[{{'productId': '{PRODUCT_1}', 'quantity': 2, 'priceAtPurchase': 25}}]",
            order_id="6e1c0c4e-8f53-4c1e-9d2b-1a2b3c4d5e02",
        ),
        make_order(
            CUSTOMER_2,
            datetime(2024, 1, 5),
            30.0,
            [{"productId": PRODUCT_3, "quantity": 10, "priceAtPurchase": 3}],
            status="pending",
            order_id="6e1c0c4e-8f53-4c1e-9d2b-1a2b3c4d5e03",
        ),
    ]


@pytest.fixture
def store(order_docs, customer_docs, product_docs) -> InMemoryStore:
    return InMemoryStore(orders=order_docs, customers=customer_docs, products=product_docs)


@pytest.fixture
def paged_store(customer_docs, product_docs) -> InMemoryStore:
    """Twelve orders for CUSTOMER_3, one per day from 2024-02-01, shuffled"""
    start = datetime(2024, 2, 1, tzinfo=timezone.utc)
    docs = [
        make_order(
            CUSTOMER_3,
            start + timedelta(days=day),
            10.0 + day,
            [{"productId": PRODUCT_3, "quantity": 1, "priceAtPurchase": 10.0 + day}],
            order_id=f"page-order-{day + 1:02d}",
        )
        for day in (5, 0, 11, 3, 8, 1, 10, 6, 2, 9, 4, 7)
    ]
    return InMemoryStore(orders=docs, customers=customer_docs, products=product_docs)


@pytest.fixture
def unavailable_store() -> UnavailableStore:
    return UnavailableStore()
