"""
Cart repository.

This module provides data access operations for shopping carts and their
product lines.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.carts import Cart, CartItem
from ..entities.products import Product
from .base import SQLModelRepository


class CartRepository(SQLModelRepository[Cart]):
    """Repository for cart data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Cart)

    async def get_by_user(self, user_id: int) -> Optional[Cart]:
        stmt = select(Cart).where(Cart.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_item(self, cart_id: int, product_id: int) -> Optional[CartItem]:
        stmt = select(CartItem).where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_items_with_products(self, cart_id: int) -> List[Tuple[CartItem, Product]]:
        """Cart lines joined with their products, oldest line first."""
        stmt = (
            select(CartItem, Product)
            .join(Product, Product.id == CartItem.product_id)
            .where(CartItem.cart_id == cart_id)
            .order_by(CartItem.created_at, CartItem.id)
        )
        result = await self.session.execute(stmt)
        return [(item, product) for item, product in result.all()]

    async def add_item(self, item: CartItem) -> CartItem:
        """Stage a new cart line. Only flushes; the caller commits."""
        self.session.add(item)
        await self.session.flush()
        return item

    async def remove_item(self, item: CartItem) -> None:
        await self.session.delete(item)
        await self.session.flush()

    async def clear(self, cart_id: int) -> None:
        """Remove every line of a cart. Only flushes; the caller commits."""
        await self.session.execute(delete(CartItem).where(CartItem.cart_id == cart_id))

    async def remove_product_lines(self, product_id: int) -> List[int]:
        """Drop a product from every cart. Only flushes; returns the ids of the carts touched."""
        stmt = select(CartItem.cart_id).where(CartItem.product_id == product_id).distinct()
        cart_ids = list((await self.session.execute(stmt)).scalars().all())
        if cart_ids:
            await self.session.execute(delete(CartItem).where(CartItem.product_id == product_id))
        return cart_ids
