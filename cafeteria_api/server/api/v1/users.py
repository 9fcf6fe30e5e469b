"""
User account endpoints.

Registration and login for customers, the caller's own profile, password and
address book, and user administration for admins.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request, status

from cafeteria_api.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.models.io.addresses import AddressCreate, AddressRead, AddressUpdate
from cafeteria_api.core.models.io.common import ErrorResponse, MessageResponse, Page
from cafeteria_api.core.models.io.users import (
    PasswordChange,
    TokenResponse,
    UserAdminRead,
    UserLogin,
    UserProfileUpdate,
    UserRead,
    UserRegister,
    UserStatusUpdate,
)
from cafeteria_api.server.rate_limit import AUTH_LIMIT, REGISTER_LIMIT, limiter
from cafeteria_api.server.services.deps import AdminDep, AuthServiceDep, UserDep, UserServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


# ==================== AUTHENTICATION ====================


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Customer",
    description="Create a customer account and return an access token for it.",
    response_description="The new user and a bearer token.",
    responses={
        201: {"description": "Account created"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
@limiter.limit(REGISTER_LIMIT)
async def register(request: Request, data: UserRegister, auth: AuthServiceDep) -> TokenResponse:
    """
    Register a new customer.

    - **email**: Login e-mail, must be unique.
    - **password**: 6 to 72 characters.
    - **phone**: Optional, 8 to 15 digits with an optional leading `+`.
    """
    user, token = await auth.register_user(data)
    return TokenResponse(access_token=token, user=UserRead.model_validate(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Customer Login",
    description="Exchange e-mail and password for a user access token.",
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials or inactive account"}},
)
@limiter.limit(AUTH_LIMIT)
async def login(request: Request, data: UserLogin, auth: AuthServiceDep) -> TokenResponse:
    user, token = await auth.login_user(data)
    return TokenResponse(access_token=token, user=UserRead.model_validate(user))


@router.get(
    "/verify",
    response_model=UserRead,
    summary="Verify Token",
    description="Return the user a valid access token belongs to.",
    responses={401: {"model": ErrorResponse, "description": "Missing, expired or invalid token"}},
)
async def verify(principal: UserDep) -> UserRead:
    return UserRead.model_validate(principal.entity)


# ==================== PROFILE ====================


@router.get("/profile", response_model=UserRead, summary="Get Profile")
async def get_profile(principal: UserDep) -> UserRead:
    """Return the caller's profile."""
    return UserRead.model_validate(principal.entity)


@router.put(
    "/profile",
    response_model=UserRead,
    summary="Update Profile",
    description="Partially update the caller's profile. Only provided fields change.",
    responses={409: {"model": ErrorResponse, "description": "Email already registered"}},
)
async def update_profile(data: UserProfileUpdate, principal: UserDep, users: UserServiceDep) -> UserRead:
    user = await users.update_profile(principal.entity, data)
    return UserRead.model_validate(user)


@router.put(
    "/change-password",
    response_model=MessageResponse,
    summary="Change Password",
    responses={401: {"model": ErrorResponse, "description": "Current password is incorrect"}},
)
async def change_password(data: PasswordChange, principal: UserDep, users: UserServiceDep) -> MessageResponse:
    await users.change_password(principal.entity, data)
    return MessageResponse(message="Password updated")


# ==================== ADDRESSES ====================


@router.get(
    "/addresses",
    response_model=List[AddressRead],
    summary="List Addresses",
    description="List the caller's addresses, primary first.",
)
async def list_addresses(principal: UserDep, users: UserServiceDep) -> List[AddressRead]:
    return [AddressRead.model_validate(a) for a in await users.list_addresses(principal.id)]


@router.post(
    "/addresses",
    response_model=AddressRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Address",
    description="Add an address. The first address always becomes the primary one; a new primary demotes the rest.",
)
async def create_address(data: AddressCreate, principal: UserDep, users: UserServiceDep) -> AddressRead:
    return AddressRead.model_validate(await users.create_address(principal.id, data))


@router.put(
    "/addresses/{address_id}",
    response_model=AddressRead,
    summary="Update Address",
    responses={404: {"model": ErrorResponse, "description": "Address not found for this user"}},
)
async def update_address(
    address_id: int, data: AddressUpdate, principal: UserDep, users: UserServiceDep
) -> AddressRead:
    return AddressRead.model_validate(await users.update_address(principal.id, address_id, data))


@router.delete(
    "/addresses/{address_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Address",
    description="Delete one of the caller's addresses. Deleting the primary promotes the oldest remaining one.",
    responses={404: {"model": ErrorResponse, "description": "Address not found for this user"}},
)
async def delete_address(address_id: int, principal: UserDep, users: UserServiceDep) -> None:
    await users.delete_address(principal.id, address_id)


@router.put(
    "/addresses/{address_id}/primary",
    response_model=AddressRead,
    summary="Set Primary Address",
    responses={404: {"model": ErrorResponse, "description": "Address not found for this user"}},
)
async def set_primary_address(address_id: int, principal: UserDep, users: UserServiceDep) -> AddressRead:
    return AddressRead.model_validate(await users.set_primary_address(principal.id, address_id))


# ==================== ADMINISTRATION ====================


@router.get(
    "",
    response_model=Page[UserAdminRead],
    summary="List Users",
    description="List user accounts with pagination, an active filter and a name/e-mail search. Admin only.",
)
async def list_users(
    admin: AdminDep,
    users: UserServiceDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
) -> Page[UserAdminRead]:
    items, total = await users.list_users(
        search=search, is_active=is_active, limit=page_size, offset=(page - 1) * page_size
    )
    return Page[UserAdminRead].build(items, total, page, page_size)


@router.get(
    "/{user_id}",
    response_model=UserAdminRead,
    summary="Get User",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(user_id: int, admin: AdminDep, users: UserServiceDep) -> UserAdminRead:
    user = await users.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User {user_id} not found")
    return user


@router.put(
    "/{user_id}/status",
    response_model=UserAdminRead,
    summary="Activate or Deactivate User",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def set_user_status(
    user_id: int, data: UserStatusUpdate, admin: AdminDep, users: UserServiceDep
) -> UserAdminRead:
    """Deactivated users can no longer log in, and their existing tokens stop working."""
    result = await users.set_user_status(user_id, data.is_active)
    logger.debug(f"Admin {admin.id} set user {user_id} active={data.is_active}")
    return result
