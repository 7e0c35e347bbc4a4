"""
Ingestion Module

Synthetic data seeding for local development.
"""
