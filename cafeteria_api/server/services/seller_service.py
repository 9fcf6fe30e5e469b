"""
Seller (staff account) service.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.database.entities.sellers import Seller
from cafeteria_api.core.database.repositories import build_sql_repos_from_session
from cafeteria_api.core.errors import AuthenticationError, BusinessRuleError, ConflictError, NotFoundError
from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.models.io.sellers import SellerCreate, SellerUpdate
from cafeteria_api.core.models.io.users import PasswordChange
from cafeteria_api.core.security import hash_password, verify_password

logger = get_logger(__name__)


class SellerService:
    """Service for managing seller accounts."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def list_sellers(self) -> List[Seller]:
        return await self.repos.sellers.list()

    async def get_seller(self, seller_id: int) -> Optional[Seller]:
        return await self.repos.sellers.get_by_id(seller_id)

    async def _require_seller(self, seller_id: int) -> Seller:
        seller = await self.repos.sellers.get_by_id(seller_id)
        if seller is None:
            raise NotFoundError("Seller", seller_id)
        return seller

    async def create_seller(self, data: SellerCreate) -> Seller:
        if await self.repos.sellers.get_by_email(data.email):
            raise ConflictError("Email already registered", code="EMAIL_TAKEN")
        seller = Seller(
            **data.model_dump(exclude={"password", "email"}),
            email=data.email.lower(),
            password_hash=hash_password(data.password),
        )
        seller = await self.repos.sellers.create(seller)
        logger.info(f"Created seller {seller.id}")
        return seller

    async def update_seller(self, seller_id: int, data: SellerUpdate) -> Seller:
        seller = await self._require_seller(seller_id)
        changes = data.model_dump(exclude_unset=True)
        email = changes.get("email")
        if email is not None:
            owner = await self.repos.sellers.get_by_email(email)
            if owner is not None and owner.id != seller.id:
                raise ConflictError("Email already registered", code="EMAIL_TAKEN")
            changes["email"] = email.lower()
        for key, value in changes.items():
            setattr(seller, key, value)
        return await self.repos.sellers.update(seller)

    async def delete_seller(self, seller_id: int) -> None:
        """
        Delete a seller account.

        Raises:
            BusinessRuleError: The seller still owns products
        """
        await self._require_seller(seller_id)
        if await self.repos.products.count({"seller_id": seller_id}) > 0:
            raise BusinessRuleError("Seller has associated products", code="SELLER_HAS_PRODUCTS")
        await self.repos.sellers.delete(seller_id)
        logger.info(f"Deleted seller {seller_id}")

    async def change_password(self, seller_id: int, data: PasswordChange) -> None:
        seller = await self._require_seller(seller_id)
        if not verify_password(data.current_password, seller.password_hash):
            raise AuthenticationError("Current password is incorrect", code="INVALID_CREDENTIALS")
        seller.password_hash = hash_password(data.new_password)
        await self.repos.sellers.update(seller)
