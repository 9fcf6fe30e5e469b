"""
Seller repository.

This module provides data access operations for seller (staff) accounts.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.sellers import Seller
from .base import SQLModelRepository


class SellerRepository(SQLModelRepository[Seller]):
    """Repository for seller data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Seller)

    async def get_by_email(self, email: str) -> Optional[Seller]:
        stmt = select(Seller).where(func.lower(Seller.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
