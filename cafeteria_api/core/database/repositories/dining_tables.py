"""
Dining table repository.

This module provides data access operations for dining tables.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from cafeteria_api.core.constants import TableStatus

from ..entities.dining_tables import DiningTable
from .base import SQLModelRepository


class DiningTableRepository(SQLModelRepository[DiningTable]):
    """Repository for dining table data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, DiningTable)

    async def get_by_number(self, number: str) -> Optional[DiningTable]:
        stmt = select(DiningTable).where(DiningTable.number == number)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active(self, statuses: Optional[List[TableStatus]] = None) -> List[DiningTable]:
        """Active tables ordered by number, optionally restricted to some statuses."""
        stmt = select(DiningTable).where(DiningTable.is_active == True)  # noqa: E712
        if statuses:
            stmt = stmt.where(DiningTable.status.in_([status.value for status in statuses]))
        stmt = stmt.order_by(DiningTable.number)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
