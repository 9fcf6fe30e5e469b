"""
Request dependencies.

Provides the database session, the authenticated principal, role guards and
one service instance per request for API endpoints.
"""

from typing import Annotated, Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.constants import PrincipalKind
from cafeteria_api.core.database import get_session
from cafeteria_api.core.errors import AuthenticationError, PermissionDeniedError

from .auth_service import AuthService, Principal
from .cart_service import CartService
from .catalog_service import CategoryService, ProductService, ReviewService
from .order_service import OrderService
from .reference_service import ReferenceDataService
from .role_service import RoleService
from .seller_service import SellerService
from .table_service import TableService
from .user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_current_principal(
    session: SessionDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """Resolve the ``Authorization: Bearer`` header into a principal."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication token required", code="NO_TOKEN")
    return await AuthService(session).resolve_token(credentials.credentials)


PrincipalDep = Annotated[Principal, Depends(get_current_principal)]


async def get_current_user(principal: PrincipalDep) -> Principal:
    """Only accept customer/admin user tokens."""
    if principal.kind != PrincipalKind.USER:
        raise AuthenticationError("A user token is required", code="INVALID_TOKEN_TYPE")
    return principal


async def get_current_seller(principal: PrincipalDep) -> Principal:
    """Only accept seller tokens."""
    if principal.kind != PrincipalKind.SELLER:
        raise AuthenticationError("A seller token is required", code="INVALID_TOKEN_TYPE")
    return principal


UserDep = Annotated[Principal, Depends(get_current_user)]
SellerDep = Annotated[Principal, Depends(get_current_seller)]


def require_roles(*roles: str) -> Callable:
    """
    Build a dependency that admits principals holding any of ``roles``.

    Admins always pass.
    """

    async def checker(principal: PrincipalDep) -> Principal:
        if not principal.has_any_role(*roles):
            raise PermissionDeniedError(details={"required_roles": list(roles)})
        return principal

    return checker


AdminDep = Annotated[Principal, Depends(require_roles())]
StaffDep = Annotated[Principal, Depends(require_roles("seller"))]


# ==================== SERVICES ====================


def get_auth_service(session: SessionDep) -> AuthService:
    return AuthService(session)


def get_user_service(session: SessionDep) -> UserService:
    return UserService(session)


def get_role_service(session: SessionDep) -> RoleService:
    return RoleService(session)


def get_seller_service(session: SessionDep) -> SellerService:
    return SellerService(session)


def get_category_service(session: SessionDep) -> CategoryService:
    return CategoryService(session)


def get_product_service(session: SessionDep) -> ProductService:
    return ProductService(session)


def get_review_service(session: SessionDep) -> ReviewService:
    return ReviewService(session)


def get_cart_service(session: SessionDep) -> CartService:
    return CartService(session)


def get_order_service(session: SessionDep) -> OrderService:
    return OrderService(session)


def get_table_service(session: SessionDep) -> TableService:
    return TableService(session)


def get_reference_service(session: SessionDep) -> ReferenceDataService:
    return ReferenceDataService(session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
RoleServiceDep = Annotated[RoleService, Depends(get_role_service)]
SellerServiceDep = Annotated[SellerService, Depends(get_seller_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
CartServiceDep = Annotated[CartService, Depends(get_cart_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
TableServiceDep = Annotated[TableService, Depends(get_table_service)]
ReferenceServiceDep = Annotated[ReferenceDataService, Depends(get_reference_service)]
