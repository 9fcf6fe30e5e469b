"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- common: Error envelope, pagination and the partial-update base
- users, addresses, roles, sellers: Accounts and access
- categories, products, reviews: Catalog
- carts, orders, payment_methods, order_statuses: Ordering
- dining_tables: Point-of-sale tables
"""

from .common import ErrorResponse, MessageResponse, Page, PartialUpdate

__all__ = ["ErrorResponse", "MessageResponse", "Page", "PartialUpdate"]
