"""
Address repository.

This module provides data access operations for delivery addresses. All
lookups are scoped by owner so one user can never reach another's address.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.addresses import Address
from .base import SQLModelRepository


class AddressRepository(SQLModelRepository[Address]):
    """Repository for address data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Address)

    async def list_for_user(self, user_id: int) -> List[Address]:
        """List a user's addresses, primary first, then oldest first."""
        stmt = (
            select(Address)
            .where(Address.user_id == user_id)
            .order_by(Address.is_primary.desc(), Address.created_at, Address.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user(self, address_id: int, user_id: int) -> Optional[Address]:
        stmt = select(Address).where(Address.id == address_id, Address.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_primary(self, user_id: int) -> Optional[Address]:
        stmt = select(Address).where(Address.user_id == user_id, Address.is_primary == True)  # noqa: E712
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def demote_others(self, user_id: int, keep_id: Optional[int] = None) -> None:
        """Clear ``is_primary`` on every address of the user except ``keep_id``.

        Only flushes; the caller commits.
        """
        stmt = update(Address).where(Address.user_id == user_id, Address.is_primary == True)  # noqa: E712
        if keep_id is not None:
            stmt = stmt.where(Address.id != keep_id)
        await self.session.execute(stmt.values(is_primary=False))

    async def count_for_user(self, user_id: int) -> int:
        return await self.count({"user_id": user_id})
