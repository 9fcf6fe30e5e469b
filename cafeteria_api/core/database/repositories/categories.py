"""
Category repository.

This module provides data access operations for product categories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.categories import Category
from ..entities.products import Product
from .base import QueryBuilder, SQLModelRepository


class CategoryRepository(SQLModelRepository[Category]):
    """Repository for category data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Category)

    async def list_by_name(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Category]:
        stmt = QueryBuilder.apply_pagination(select(Category).order_by(Category.name), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def has_products(self, category_id: int) -> bool:
        """Whether any product still points at the category."""
        stmt = select(func.count()).select_from(Product).where(Product.category_id == category_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one()) > 0
