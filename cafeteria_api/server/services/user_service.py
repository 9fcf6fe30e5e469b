"""
User account service.

Covers the customer's own profile, password and address book, plus the
administrator's user listing and activation switch.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.database.entities.addresses import Address
from cafeteria_api.core.database.entities.users import User
from cafeteria_api.core.database.repositories import build_sql_repos_from_session
from cafeteria_api.core.errors import AuthenticationError, ConflictError, NotFoundError
from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.models.io.addresses import AddressCreate, AddressUpdate
from cafeteria_api.core.models.io.users import PasswordChange, UserAdminRead, UserProfileUpdate
from cafeteria_api.core.security import hash_password, verify_password

logger = get_logger(__name__)


class UserService:
    """Service for user profiles, addresses and user administration."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    # ==================== PROFILE ====================

    async def update_profile(self, user: User, data: UserProfileUpdate) -> User:
        """
        Apply a partial profile update.

        Raises:
            ConflictError: The new e-mail belongs to another account
        """
        changes = data.model_dump(exclude_unset=True)
        email = changes.get("email")
        if email is not None:
            owner = await self.repos.users.get_by_email(email)
            if owner is not None and owner.id != user.id:
                raise ConflictError("Email already registered", code="EMAIL_TAKEN")
            changes["email"] = email.lower()

        for key, value in changes.items():
            setattr(user, key, value)
        return await self.repos.users.update(user)

    async def change_password(self, user: User, data: PasswordChange) -> None:
        """
        Replace the password after checking the current one.

        Raises:
            AuthenticationError: The current password does not match
        """
        if not verify_password(data.current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect", code="INVALID_CREDENTIALS")
        user.password_hash = hash_password(data.new_password)
        await self.repos.users.update(user)
        logger.info(f"User {user.id} changed password")

    # ==================== ADDRESSES ====================

    async def list_addresses(self, user_id: int) -> List[Address]:
        return await self.repos.addresses.list_for_user(user_id)

    async def _get_own_address(self, user_id: int, address_id: int) -> Address:
        address = await self.repos.addresses.get_for_user(address_id, user_id)
        if address is None:
            raise NotFoundError("Address", address_id)
        return address

    async def create_address(self, user_id: int, data: AddressCreate) -> Address:
        """Add an address. The first one, or one flagged primary, becomes the primary address."""
        is_first = await self.repos.addresses.count_for_user(user_id) == 0
        address = Address(user_id=user_id, **data.model_dump())
        address.is_primary = data.is_primary or is_first

        address = await self.repos.addresses.create(address, commit=False)
        if address.is_primary:
            await self.repos.addresses.demote_others(user_id, keep_id=address.id)
        await self.session.commit()
        await self.session.refresh(address)
        return address

    async def update_address(self, user_id: int, address_id: int, data: AddressUpdate) -> Address:
        address = await self._get_own_address(user_id, address_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(address, key, value)
        return await self.repos.addresses.update(address)

    async def delete_address(self, user_id: int, address_id: int) -> None:
        """Remove an address. Removing the primary promotes the oldest remaining one."""
        address = await self._get_own_address(user_id, address_id)
        was_primary = address.is_primary
        await self.repos.addresses.delete(address.id, commit=False)

        if was_primary:
            remaining = await self.repos.addresses.list_for_user(user_id)
            if remaining:
                oldest = min(remaining, key=lambda a: (a.created_at, a.id))
                oldest.is_primary = True
                await self.repos.addresses.update(oldest, commit=False)
        await self.session.commit()

    async def set_primary_address(self, user_id: int, address_id: int) -> Address:
        address = await self._get_own_address(user_id, address_id)
        await self.repos.addresses.demote_others(user_id, keep_id=address.id)
        address.is_primary = True
        return await self.repos.addresses.update(address)

    # ==================== ADMINISTRATION ====================

    async def _admin_view(self, user: User) -> UserAdminRead:
        assigned = await self.repos.users.get_role_names(user.id)
        roles = sorted({user.role} | assigned)
        return UserAdminRead.model_validate(user).model_copy(update={"roles": roles})

    async def list_users(
        self,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[UserAdminRead], int]:
        users = await self.repos.users.search(search=search, is_active=is_active, limit=limit, offset=offset)
        total = await self.repos.users.count_search(search=search, is_active=is_active)
        return [await self._admin_view(user) for user in users], total

    async def get_user(self, user_id: int) -> Optional[UserAdminRead]:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            return None
        return await self._admin_view(user)

    async def set_user_status(self, user_id: int, is_active: bool) -> UserAdminRead:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        user.is_active = is_active
        user = await self.repos.users.update(user)
        logger.info(f"User {user_id} {'activated' if is_active else 'deactivated'}")
        return await self._admin_view(user)
