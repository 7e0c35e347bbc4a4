"""
Serving Module

GraphQL and health endpoints in front of the analytics engine.
"""
