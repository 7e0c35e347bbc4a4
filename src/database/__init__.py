"""
Database Module
"""
from .connection import DocumentStore
from .models import Customer, Order, OrderLine, OrderStatus, Product
from .repositories import StoreHandle

__all__ = [
    "DocumentStore",
    "StoreHandle",
    "Order",
    "OrderLine",
    "OrderStatus",
    "Customer",
    "Product",
]
