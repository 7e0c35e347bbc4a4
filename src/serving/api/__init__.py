"""
API Module
"""
from .graphql import graphql_app, schema
from .middleware import RequestLoggingMiddleware

__all__ = [
    "graphql_app",
    "schema",
    "RequestLoggingMiddleware",
]
