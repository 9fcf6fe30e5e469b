"""
Database entity models.

This package contains all database entity models organized by business domain
and table relationships. Each module represents either:

1. A single database table and its related logic
2. A business domain that spans multiple related tables

Modules:
- roles: Role definitions
- users: User accounts and extra role assignments
- addresses: Delivery addresses
- sellers: Seller (staff) accounts
- categories: Product categories
- products: Products and their image gallery
- carts: Shopping carts and cart lines
- payment_methods: Accepted payment methods
- order_statuses: Order status catalog
- orders: Orders, order lines and status history
- reviews: Product reviews
- dining_tables: Dining tables for point-of-sale orders
"""

from . import (
    addresses,
    carts,
    categories,
    dining_tables,
    order_statuses,
    orders,
    payment_methods,
    products,
    reviews,
    roles,
    sellers,
    users,
)

__all__ = [
    "addresses",
    "carts",
    "categories",
    "dining_tables",
    "order_statuses",
    "orders",
    "payment_methods",
    "products",
    "reviews",
    "roles",
    "sellers",
    "users",
]
