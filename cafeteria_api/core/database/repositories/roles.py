"""
Role repository.

This module provides data access operations for the role catalog.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.roles import Role
from .base import SQLModelRepository


class RoleRepository(SQLModelRepository[Role]):
    """Repository for role data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Role)

    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get a role by its unique name.

        Args:
            name: Role name (e.g. ``admin``)

        Returns:
            Role instance or None
        """
        stmt = select(Role).where(Role.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_ids(self, role_ids: List[int]) -> List[Role]:
        if not role_ids:
            return []
        stmt = select(Role).where(Role.id.in_(role_ids)).order_by(Role.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
