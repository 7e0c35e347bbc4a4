"""
Database Seeding

Fills the document store with a small synthetic dataset shaped like
production data:

- customers keyed by plain UUID strings
- products keyed by subtype-4 binaries
- orders whose customerId is a subtype-4 binary and whose products field is
  a native list or, for a share of rows, the legacy single-quoted string

Usage:
    python -m src.ingestion.seed_db --customers 200 --products 50 --orders 2000
"""

import argparse
import asyncio
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

import structlog
from faker import Faker

from src.analytics import codec
from src.config import get_settings
from src.config.logging import configure_logging
from src.database.connection import DocumentStore

logger = structlog.get_logger(__name__)

fake = Faker()

CATEGORIES = ["Electronics", "Clothing", "Home & Garden", "Sports", "Beauty", "Books"]


def generate_customers(n: int) -> List[Dict[str, Any]]:
    """Generate n customer documents"""
    return [
        {
            "_id": fake.uuid4(),
            "name": fake.name(),
            "email": fake.unique.email(),
            "age": random.randint(18, 80),
            "location": fake.city(),
            "gender": random.choice(["Male", "Female"]),
        }
        for _ in range(n)
    ]


def generate_products(n: int) -> List[Dict[str, Any]]:
    """Generate n product documents"""
    return [
        {
            "_id": codec.encode(fake.uuid4()),
            "name": f"{fake.word().title()} {fake.word().title()}",
            "category": random.choice(CATEGORIES),
            "price": round(random.uniform(5, 500), 2),
            "stock": random.randint(0, 500),
        }
        for _ in range(n)
    ]


def legacy_products_string(lines: List[Dict[str, Any]]) -> str:
    """Render order lines the way the old import stored them"""
    items = ", ".join(
        "{'productId': '%s', 'quantity': %d, 'priceAtPurchase': %s}"
        % (line["productId"], line["quantity"], line["priceAtPurchase"])
        for line in lines
    )
    return f"[{items}]"


def generate_orders(
    n: int,
    customers: List[Dict[str, Any]],
    products: List[Dict[str, Any]],
    legacy_share: float = 0.2,
    days: int = 365,
) -> List[Dict[str, Any]]:
    """
    Generate n order documents over the last `days` days.

    `legacy_share` of them get their product list as a legacy string, and
    about one in ten of those dates is stored as an ISO string as well.
    """
    now = datetime.now(timezone.utc)
    orders = []

    for _ in range(n):
        customer = random.choice(customers)
        picked = random.sample(products, k=min(len(products), random.randint(1, 4)))
        lines = []
        for product in picked:
            # Purchase-time price drifts from the current catalog price
            price = round(product["price"] * random.uniform(0.8, 1.1), 2)
            lines.append({
                "productId": codec.decode(product["_id"]),
                "quantity": random.randint(1, 5),
                "priceAtPurchase": price,
            })

        order_date = now - timedelta(days=random.uniform(0, days))
        is_legacy = random.random() < legacy_share

        orders.append({
            "_id": fake.uuid4(),
            "customerId": codec.encode(customer["_id"]),
            "products": legacy_products_string(lines) if is_legacy else lines,
            "totalAmount": round(sum(l["quantity"] * l["priceAtPurchase"] for l in lines), 2),
            "orderDate": order_date.isoformat() if is_legacy and random.random() < 0.1 else order_date,
            "status": random.choices(["completed", "pending"], weights=[0.8, 0.2])[0],
        })

    return orders


async def seed(
    store: DocumentStore,
    n_customers: int,
    n_products: int,
    n_orders: int,
    drop: bool = False,
) -> Dict[str, int]:
    """Insert a generated dataset and return the inserted counts"""
    settings = store.settings
    db = store.database

    if drop:
        for name in (settings.customers_collection, settings.products_collection, settings.orders_collection):
            await db.drop_collection(name)
        logger.info("Existing collections dropped")

    customers = generate_customers(n_customers)
    products = generate_products(n_products)
    orders = generate_orders(n_orders, customers, products)

    await db[settings.customers_collection].insert_many(customers)
    await db[settings.products_collection].insert_many(products)
    await db[settings.orders_collection].insert_many(orders)

    counts = {"customers": len(customers), "products": len(products), "orders": len(orders)}
    logger.info("Database seeding completed", **counts)
    return counts


async def main(args: argparse.Namespace) -> None:
    configure_logging()
    async with DocumentStore(get_settings().database) as store:
        await seed(store, args.customers, args.products, args.orders, drop=args.drop)


def cli() -> None:
    parser = argparse.ArgumentParser(description="Seed the order analytics store")
    parser.add_argument("--customers", type=int, default=200)
    parser.add_argument("--products", type=int, default=50)
    parser.add_argument("--orders", type=int, default=2000)
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")
    parser.add_argument("--drop", action="store_true", help="Drop collections before inserting")
    args = parser.parse_args()

    random.seed(args.seed)
    Faker.seed(args.seed)

    asyncio.run(main(args))


if __name__ == "__main__":
    cli()
