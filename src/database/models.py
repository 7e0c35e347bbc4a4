"""
Document Models

Typed records for the three collections of the order-management store:

- orders: `_id` string, `customerId` binary (subtype 4), `products` as a
  native list or a legacy string, `totalAmount`, `orderDate`, `status`
- customers: `_id` string plus identity/demographic fields
- products: `_id` binary (subtype 4), catalog fields

Raw documents are parsed into these models right after they leave the store;
nothing downstream reads string-keyed dicts.
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from bson.binary import Binary
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.analytics import codec
from src.analytics.dates import parse_timestamp


# =============================================================================
# ENUMERATIONS
# =============================================================================

class OrderStatus(str, Enum):
    """Order status enumeration"""
    PENDING = "pending"
    COMPLETED = "completed"


class Gender(str, Enum):
    """Customer gender enumeration"""
    MALE = "Male"
    FEMALE = "Female"


# =============================================================================
# BASE
# =============================================================================

class StoredDocument(BaseModel):
    """Base class for records read from the document store"""

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )


def _binary_key(value: Any) -> Any:
    # Rows written by hand sometimes carry the string form
    if isinstance(value, str):
        return codec.encode(value)
    return value


# =============================================================================
# RECORDS
# =============================================================================

class OrderLine(BaseModel):
    """One product entry of an order, priced at purchase time"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    product_id: str = Field(alias="productId")
    quantity: int
    price_at_purchase: float = Field(alias="priceAtPurchase")

    @field_validator("product_id", mode="before")
    @classmethod
    def read_product_id(cls, v: Any) -> Any:
        if v is None:
            return v
        return codec.as_uuid_string(v)

    @property
    def line_total(self) -> float:
        return self.quantity * self.price_at_purchase


class Order(StoredDocument):
    """Order document"""

    id: str = Field(alias="_id")
    customer_key: Binary = Field(alias="customerId")
    products: List[OrderLine] = Field(default_factory=list)
    total_amount: float = Field(default=0.0, alias="totalAmount")
    order_date: datetime = Field(alias="orderDate")
    status: OrderStatus

    @field_validator("id", mode="before")
    @classmethod
    def read_id(cls, v: Any) -> str:
        return codec.as_uuid_string(v)

    @field_validator("customer_key", mode="before")
    @classmethod
    def read_customer_key(cls, v: Any) -> Any:
        return _binary_key(v)

    @field_validator("products", mode="before")
    @classmethod
    def read_products(cls, v: Any) -> List[OrderLine]:
        from src.analytics.normalizer import normalize_products
        return normalize_products(v)

    @field_validator("order_date", mode="before")
    @classmethod
    def read_order_date(cls, v: Any) -> datetime:
        return parse_timestamp(v)

    @property
    def customer_id(self) -> str:
        return codec.decode(self.customer_key)


class Customer(StoredDocument):
    """Customer document, keyed by a plain string id"""

    id: str = Field(alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = None
    location: Optional[str] = None
    gender: Optional[Gender] = None

    @field_validator("id", mode="before")
    @classmethod
    def read_id(cls, v: Any) -> str:
        return codec.as_uuid_string(v)


class Product(StoredDocument):
    """Product catalog document, keyed by a subtype-4 binary"""

    key: Binary = Field(alias="_id")
    name: str
    category: str
    price: float = 0.0
    stock: int = 0

    @field_validator("key", mode="before")
    @classmethod
    def read_key(cls, v: Any) -> Any:
        return _binary_key(v)

    @property
    def id(self) -> str:
        return codec.decode(self.key)
