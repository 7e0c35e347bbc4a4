"""
GraphQL API

Strawberry schema exposing the four analytics queries. Resolvers only
translate arguments and results; the store handle comes from the request
context.
"""

from typing import List, Optional

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info
from fastapi import Request

from src.analytics import schemas
from src.analytics.customer_orders import get_customer_orders
from src.analytics.sales import get_sales_analytics
from src.analytics.spending import get_customer_spending
from src.analytics.top_products import get_top_selling_products
from src.database.repositories import StoreHandle


# =============================================================================
# TYPES
# =============================================================================

@strawberry.type
class CustomerSpending:
    customer_id: strawberry.ID
    total_spent: float
    average_order_value: float
    last_order_date: Optional[str]

    @classmethod
    def from_result(cls, result: schemas.CustomerSpending) -> "CustomerSpending":
        return cls(
            customer_id=strawberry.ID(result.customer_id),
            total_spent=result.total_spent,
            average_order_value=result.average_order_value,
            last_order_date=result.last_order_date,
        )


@strawberry.type
class TopProduct:
    product_id: strawberry.ID
    name: str
    total_sold: int


@strawberry.type
class CategoryRevenue:
    category: str
    revenue: float


@strawberry.type
class SalesAnalytics:
    total_revenue: float
    completed_orders: int
    category_breakdown: List[CategoryRevenue]


@strawberry.type
class OrderProduct:
    product_id: str
    quantity: int
    price_at_purchase: float


@strawberry.type
class OrderCustomer:
    id: strawberry.ID
    name: Optional[str]
    email: Optional[str]


@strawberry.type
class Order:
    id: strawberry.ID
    order_date: str
    total_amount: float
    status: str
    products: List[OrderProduct]
    customer: Optional[OrderCustomer]

    @classmethod
    def from_view(cls, view: schemas.OrderView) -> "Order":
        return cls(
            id=strawberry.ID(view.id),
            order_date=view.order_date,
            total_amount=view.total_amount,
            status=view.status,
            products=[
                OrderProduct(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price_at_purchase=line.price_at_purchase,
                )
                for line in view.products
            ],
            customer=(
                OrderCustomer(
                    id=strawberry.ID(view.customer.id),
                    name=view.customer.name,
                    email=view.customer.email,
                )
                if view.customer
                else None
            ),
        )


# =============================================================================
# QUERIES
# =============================================================================

def _store(info: Info) -> StoreHandle:
    return info.context["store"]


@strawberry.type
class Query:

    @strawberry.field
    async def get_customer_spending(
        self,
        info: Info,
        customer_id: strawberry.ID,
    ) -> Optional[CustomerSpending]:
        """Spending summary of one customer"""
        result = await get_customer_spending(_store(info), str(customer_id))
        return CustomerSpending.from_result(result)

    @strawberry.field
    async def get_top_selling_products(
        self,
        info: Info,
        limit: int,
    ) -> List[Optional[TopProduct]]:
        """Best sellers by units sold across completed orders"""
        results = await get_top_selling_products(_store(info), limit)
        return [
            TopProduct(
                product_id=strawberry.ID(r.product_id),
                name=r.name,
                total_sold=r.total_sold,
            )
            for r in results
        ]

    @strawberry.field
    async def get_sales_analytics(
        self,
        info: Info,
        start_date: str,
        end_date: str,
    ) -> Optional[SalesAnalytics]:
        """Revenue and category breakdown for completed orders in a window"""
        result = await get_sales_analytics(_store(info), start_date, end_date)
        return SalesAnalytics(
            total_revenue=result.total_revenue,
            completed_orders=result.completed_orders,
            category_breakdown=[
                CategoryRevenue(category=row.category, revenue=row.revenue)
                for row in result.category_breakdown
            ],
        )

    @strawberry.field
    async def get_customer_orders(
        self,
        info: Info,
        customer_id: str,
        page: int,
        limit: int,
    ) -> List[Order]:
        """A page of one customer's orders, newest first"""
        views = await get_customer_orders(_store(info), customer_id, page=page, limit=limit)
        return [Order.from_view(view) for view in views]


# =============================================================================
# SCHEMA & ROUTER
# =============================================================================

schema = strawberry.Schema(query=Query)


async def get_context(request: Request) -> dict:
    """Expose the application's store handle to resolvers"""
    return {"store": request.app.state.store}


graphql_app = GraphQLRouter(
    schema,
    path="",
    graphql_ide="graphiql",
    context_getter=get_context,
)
