"""
Order status repository.

This module provides data access operations for the order status catalog.
Status names are matched case-insensitively so data seeded with capitalized
names (``Delivered``) resolves the same as ``delivered``.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from cafeteria_api.core.constants import FINAL_ORDER_STATUSES

from ..entities.order_statuses import OrderStatus
from .base import SQLModelRepository


class OrderStatusRepository(SQLModelRepository[OrderStatus]):
    """Repository for order status data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, OrderStatus)

    async def get_by_name(self, name: str) -> Optional[OrderStatus]:
        stmt = select(OrderStatus).where(func.lower(OrderStatus.name) == name.lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def ids_for_names(self, names: Iterable[str]) -> List[int]:
        lowered = [name.lower() for name in names]
        stmt = select(OrderStatus.id).where(func.lower(OrderStatus.name).in_(lowered))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def final_status_ids(self) -> List[int]:
        """Ids of the statuses that close an order (delivered, cancelled)."""
        return await self.ids_for_names(status.value for status in FINAL_ORDER_STATUSES)
