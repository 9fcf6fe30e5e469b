"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
for easy dependency injection in services and application components.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .addresses import AddressRepository
from .carts import CartRepository
from .categories import CategoryRepository
from .dining_tables import DiningTableRepository
from .order_statuses import OrderStatusRepository
from .orders import OrderRepository
from .payment_methods import PaymentMethodRepository
from .products import ProductImageRepository, ProductRepository
from .reviews import ReviewRepository
from .roles import RoleRepository
from .sellers import SellerRepository
from .users import UserRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    session: AsyncSession
    users: UserRepository
    roles: RoleRepository
    addresses: AddressRepository
    sellers: SellerRepository
    categories: CategoryRepository
    products: ProductRepository
    product_images: ProductImageRepository
    carts: CartRepository
    payment_methods: PaymentMethodRepository
    order_statuses: OrderStatusRepository
    orders: OrderRepository
    reviews: ReviewRepository
    tables: DiningTableRepository


def build_sql_repos_from_session(*, session: AsyncSession) -> SqlRepoBundle:
    """Build a SqlRepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        session=session,
        users=UserRepository(session),
        roles=RoleRepository(session),
        addresses=AddressRepository(session),
        sellers=SellerRepository(session),
        categories=CategoryRepository(session),
        products=ProductRepository(session),
        product_images=ProductImageRepository(session),
        carts=CartRepository(session),
        payment_methods=PaymentMethodRepository(session),
        order_statuses=OrderStatusRepository(session),
        orders=OrderRepository(session),
        reviews=ReviewRepository(session),
        tables=DiningTableRepository(session),
    )
