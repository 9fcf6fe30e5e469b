"""
Review repository.

This module provides data access operations for product reviews.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.reviews import Review
from .base import SQLModelRepository


class ReviewRepository(SQLModelRepository[Review]):
    """Repository for review data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Review)

    async def list_for_product(self, product_id: int) -> List[Review]:
        """Reviews of a product, newest first."""
        stmt = (
            select(Review)
            .where(Review.product_id == product_id)
            .order_by(Review.reviewed_at.desc(), Review.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user_and_product(self, user_id: int, product_id: int) -> Optional[Review]:
        stmt = select(Review).where(Review.user_id == user_id, Review.product_id == product_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def summary(self, product_id: int) -> Tuple[int, Optional[float]]:
        """Review count and average rating for a product.

        Returns:
            ``(count, average)`` where average is None when there are no reviews
        """
        stmt = select(func.count(Review.id), func.avg(Review.rating)).where(Review.product_id == product_id)
        result = await self.session.execute(stmt)
        count, average = result.one()
        return int(count), (float(average) if average is not None else None)

    async def delete_for_product(self, product_id: int) -> None:
        """Remove every review of a product. Only flushes; the caller commits."""
        await self.session.execute(delete(Review).where(Review.product_id == product_id))
