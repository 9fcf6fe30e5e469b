"""
User repository interface and implementation.

This module provides data access operations for user accounts, including
lookup by e-mail, admin listing with search, and extra role assignments.
"""

from __future__ import annotations

from typing import List, Optional, Set

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.roles import Role
from ..entities.users import User, UserRole
from .base import QueryBuilder, SQLModelRepository


class UserRepository(SQLModelRepository[User]):
    """Repository for user account data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by e-mail (case-insensitive).

        Args:
            email: Login e-mail

        Returns:
            User instance or None
        """
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _search_stmt(self, stmt, search: Optional[str], is_active: Optional[bool]):
        if is_active is not None:
            stmt = stmt.where(User.is_active == is_active)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(User.first_name.ilike(pattern), User.last_name.ilike(pattern), User.email.ilike(pattern))
            )
        return stmt

    async def search(
        self,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[User]:
        """List users for administration.

        Args:
            search: Substring matched against first name, last name and e-mail
            is_active: Only return users with this active flag
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            List of User instances ordered by id
        """
        stmt = self._search_stmt(select(User), search, is_active).order_by(User.id)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_search(self, search: Optional[str] = None, is_active: Optional[bool] = None) -> int:
        stmt = self._search_stmt(select(func.count()).select_from(User), search, is_active)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    # ------------------------------------------------------------------
    # Extra role assignments
    # ------------------------------------------------------------------

    async def get_role_names(self, user_id: int) -> Set[str]:
        """Names of the roles granted to a user through ``user_roles``."""
        stmt = select(Role.name).join(UserRole, UserRole.role_id == Role.id).where(UserRole.user_id == user_id)
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def get_assignment(self, user_id: int, role_id: int) -> Optional[UserRole]:
        stmt = select(UserRole).where(UserRole.user_id == user_id, UserRole.role_id == role_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def assign_role(self, user_id: int, role_id: int) -> UserRole:
        """Grant a role to a user. Granting an already held role is a no-op."""
        existing = await self.get_assignment(user_id, role_id)
        if existing:
            return existing
        assignment = UserRole(user_id=user_id, role_id=role_id)
        self.session.add(assignment)
        await self.session.commit()
        await self.session.refresh(assignment)
        return assignment

    async def unassign_role(self, user_id: int, role_id: int) -> bool:
        existing = await self.get_assignment(user_id, role_id)
        if not existing:
            return False
        await self.session.delete(existing)
        await self.session.commit()
        return True

    async def delete_assignments_for_role(self, role_id: int) -> None:
        stmt = select(UserRole).where(UserRole.role_id == role_id)
        result = await self.session.execute(stmt)
        for assignment in result.scalars().all():
            await self.session.delete(assignment)
