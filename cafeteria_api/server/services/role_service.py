"""
Role administration service.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.database.entities.roles import Role
from cafeteria_api.core.database.entities.users import UserRole
from cafeteria_api.core.database.repositories import build_sql_repos_from_session
from cafeteria_api.core.errors import ConflictError, NotFoundError
from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.models.io.roles import RoleCreate, RoleUpdate

logger = get_logger(__name__)


class RoleService:
    """Service for role CRUD and role assignment."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def list_roles(self) -> List[Role]:
        return await self.repos.roles.list()

    async def get_role(self, role_id: int) -> Optional[Role]:
        return await self.repos.roles.get_by_id(role_id)

    async def _require_role(self, role_id: int) -> Role:
        role = await self.repos.roles.get_by_id(role_id)
        if role is None:
            raise NotFoundError("Role", role_id)
        return role

    async def create_role(self, data: RoleCreate) -> Role:
        if await self.repos.roles.get_by_name(data.name):
            raise ConflictError(f"Role '{data.name}' already exists", code="ROLE_EXISTS")
        return await self.repos.roles.create(Role(**data.model_dump()))

    async def update_role(self, role_id: int, data: RoleUpdate) -> Role:
        role = await self._require_role(role_id)
        changes = data.model_dump(exclude_unset=True)
        new_name = changes.get("name")
        if new_name is not None and new_name != role.name:
            if await self.repos.roles.get_by_name(new_name):
                raise ConflictError(f"Role '{new_name}' already exists", code="ROLE_EXISTS")
        for key, value in changes.items():
            setattr(role, key, value)
        return await self.repos.roles.update(role)

    async def delete_role(self, role_id: int) -> None:
        """Delete a role together with its user assignments."""
        await self._require_role(role_id)
        await self.repos.users.delete_assignments_for_role(role_id)
        await self.repos.roles.delete(role_id)
        logger.info(f"Deleted role {role_id}")

    async def assign(self, role_id: int, user_id: int) -> UserRole:
        await self._require_role(role_id)
        if await self.repos.users.get_by_id(user_id) is None:
            raise NotFoundError("User", user_id)
        return await self.repos.users.assign_role(user_id, role_id)

    async def unassign(self, role_id: int, user_id: int) -> None:
        await self._require_role(role_id)
        if not await self.repos.users.unassign_role(user_id, role_id):
            raise NotFoundError("Role assignment", f"{role_id}/{user_id}")
