"""
Payment method repository.

This module provides data access operations for accepted payment methods.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.payment_methods import PaymentMethod
from .base import SQLModelRepository


class PaymentMethodRepository(SQLModelRepository[PaymentMethod]):
    """Repository for payment method data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PaymentMethod)

    async def get_by_name(self, name: str) -> Optional[PaymentMethod]:
        stmt = select(PaymentMethod).where(PaymentMethod.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_methods(self, active_only: bool = False) -> List[PaymentMethod]:
        stmt = select(PaymentMethod).order_by(PaymentMethod.name)
        if active_only:
            stmt = stmt.where(PaymentMethod.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
