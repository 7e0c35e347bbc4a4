"""
Result records returned by the four query operations.

Field names are snake_case in Python and camelCase on the wire
(`model_dump(by_alias=True)`).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomerSpending(ResultModel):
    """Per-customer spending summary"""
    customer_id: str
    total_spent: float = 0.0
    average_order_value: float = 0.0
    last_order_date: Optional[str] = None


class TopProduct(ResultModel):
    """One row of the top-selling ranking"""
    product_id: str
    name: str
    total_sold: int


class CategoryRevenue(ResultModel):
    """Revenue of one product category, at purchase-time prices"""
    category: str
    revenue: float


class SalesAnalytics(ResultModel):
    """Revenue totals for a date window"""
    total_revenue: float = 0.0
    completed_orders: int = 0
    category_breakdown: List[CategoryRevenue] = []


class OrderLineView(ResultModel):
    product_id: str
    quantity: int
    price_at_purchase: float


class CustomerRef(ResultModel):
    """Identity fields of the customer owning an order"""
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class OrderView(ResultModel):
    """An order joined with its customer's identity"""
    id: str
    order_date: str
    total_amount: float
    status: str
    products: List[OrderLineView] = []
    customer: Optional[CustomerRef] = None
