"""
Authentication service.

Registers customers, checks user and seller credentials, issues access
tokens, and resolves a decoded token back into the calling principal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple, Union

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.constants import PrincipalKind, RoleName
from cafeteria_api.core.database.entities.sellers import Seller
from cafeteria_api.core.database.entities.users import User
from cafeteria_api.core.database.repositories import build_sql_repos_from_session
from cafeteria_api.core.errors import AuthenticationError, ConflictError
from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.models.io.sellers import SellerLogin
from cafeteria_api.core.models.io.users import UserLogin, UserRegister
from cafeteria_api.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request."""

    kind: PrincipalKind
    id: int
    roles: FrozenSet[str] = field(default_factory=frozenset)
    entity: Union[User, Seller, None] = field(default=None, compare=False)

    @property
    def is_admin(self) -> bool:
        return RoleName.ADMIN.value in self.roles

    @property
    def is_staff(self) -> bool:
        """Admins and sellers may manage orders and tables."""
        return self.is_admin or RoleName.SELLER.value in self.roles

    def has_any_role(self, *roles: str) -> bool:
        if self.is_admin:
            return True
        return any(role in self.roles for role in roles)


class AuthService:
    """Service for credentials, tokens and principal resolution."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def register_user(self, data: UserRegister) -> Tuple[User, str]:
        """
        Create a customer account and log it in.

        Raises:
            ConflictError: The e-mail is already registered
        """
        if await self.repos.users.get_by_email(data.email):
            raise ConflictError("Email already registered", code="EMAIL_TAKEN")

        user = User(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email.lower(),
            phone=data.phone,
            birth_date=data.birth_date,
            password_hash=hash_password(data.password),
            role=RoleName.CUSTOMER.value,
        )
        user = await self.repos.users.create(user)
        logger.info(f"Registered user {user.id}")
        token = create_access_token(user.id, PrincipalKind.USER, user.role)
        return user, token

    async def login_user(self, data: UserLogin) -> Tuple[User, str]:
        """
        Check customer credentials and issue a token.

        Raises:
            AuthenticationError: ``INVALID_CREDENTIALS`` or ``USER_INACTIVE``
        """
        user = await self.repos.users.get_by_email(data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            logger.info("Rejected user login with invalid credentials")
            raise AuthenticationError("Invalid email or password", code="INVALID_CREDENTIALS")
        if not user.is_active:
            raise AuthenticationError("User account is inactive", code="USER_INACTIVE")

        return user, create_access_token(user.id, PrincipalKind.USER, user.role)

    async def login_seller(self, data: SellerLogin) -> Tuple[Seller, str]:
        """
        Check seller credentials and issue a seller token.

        Raises:
            AuthenticationError: ``INVALID_CREDENTIALS`` or ``USER_INACTIVE``
        """
        seller = await self.repos.sellers.get_by_email(data.email)
        if seller is None or not verify_password(data.password, seller.password_hash):
            logger.info("Rejected seller login with invalid credentials")
            raise AuthenticationError("Invalid email or password", code="INVALID_CREDENTIALS")
        if not seller.is_active:
            raise AuthenticationError("Seller account is inactive", code="USER_INACTIVE")

        return seller, create_access_token(seller.id, PrincipalKind.SELLER, RoleName.SELLER.value)

    async def resolve_token(self, token: str) -> Principal:
        """
        Decode a bearer token and load the principal it names.

        Raises:
            AuthenticationError: The token is bad, or its subject is missing or inactive
        """
        payload = decode_access_token(token)
        kind = PrincipalKind(payload["kind"])
        subject_id = int(payload["sub"])

        if kind == PrincipalKind.SELLER:
            seller = await self.repos.sellers.get_by_id(subject_id)
            if seller is None:
                raise AuthenticationError("Seller not found", code="USER_NOT_FOUND")
            if not seller.is_active:
                raise AuthenticationError("Seller account is inactive", code="USER_INACTIVE")
            return Principal(kind=kind, id=seller.id, roles=frozenset({RoleName.SELLER.value}), entity=seller)

        user = await self.repos.users.get_by_id(subject_id)
        if user is None:
            raise AuthenticationError("User not found", code="USER_NOT_FOUND")
        if not user.is_active:
            raise AuthenticationError("User account is inactive", code="USER_INACTIVE")
        roles = {user.role} | await self.repos.users.get_role_names(user.id)
        return Principal(kind=kind, id=user.id, roles=frozenset(roles), entity=user)
