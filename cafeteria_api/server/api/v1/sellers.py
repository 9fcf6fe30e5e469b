"""
Seller (staff account) endpoints.

Sellers log in with their own credentials and receive a seller token.
Admins manage seller accounts.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Request, status

from cafeteria_api.core.constants import PrincipalKind
from cafeteria_api.core.errors import PermissionDeniedError
from cafeteria_api.core.models.io.common import ErrorResponse, MessageResponse
from cafeteria_api.core.models.io.sellers import (
    SellerCreate,
    SellerLogin,
    SellerRead,
    SellerTokenResponse,
    SellerUpdate,
)
from cafeteria_api.core.models.io.users import PasswordChange
from cafeteria_api.server.rate_limit import AUTH_LIMIT, limiter
from cafeteria_api.server.services.deps import (
    AdminDep,
    AuthServiceDep,
    PrincipalDep,
    SellerDep,
    SellerServiceDep,
)

router = APIRouter(tags=["sellers"])


@router.post(
    "/login",
    response_model=SellerTokenResponse,
    summary="Seller Login",
    description="Exchange seller credentials for a seller access token.",
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials or inactive account"}},
)
@limiter.limit(AUTH_LIMIT)
async def login(request: Request, data: SellerLogin, auth: AuthServiceDep) -> SellerTokenResponse:
    seller, token = await auth.login_seller(data)
    return SellerTokenResponse(access_token=token, seller=SellerRead.model_validate(seller))


@router.get("", response_model=List[SellerRead], summary="List Sellers")
async def list_sellers(admin: AdminDep, sellers: SellerServiceDep) -> List[SellerRead]:
    return [SellerRead.model_validate(seller) for seller in await sellers.list_sellers()]


@router.post(
    "",
    response_model=SellerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Seller",
    responses={409: {"model": ErrorResponse, "description": "Email already registered"}},
)
async def create_seller(data: SellerCreate, admin: AdminDep, sellers: SellerServiceDep) -> SellerRead:
    return SellerRead.model_validate(await sellers.create_seller(data))


@router.get(
    "/{seller_id}",
    response_model=SellerRead,
    summary="Get Seller",
    description="Read a seller account. Allowed for the seller themself and for admins.",
    responses={
        403: {"model": ErrorResponse, "description": "Another seller's account"},
        404: {"model": ErrorResponse, "description": "Seller not found"},
    },
)
async def get_seller(seller_id: int, principal: PrincipalDep, sellers: SellerServiceDep) -> SellerRead:
    is_self = principal.kind == PrincipalKind.SELLER and principal.id == seller_id
    if not (is_self or principal.is_admin):
        raise PermissionDeniedError()
    seller = await sellers.get_seller(seller_id)
    if seller is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Seller {seller_id} not found")
    return SellerRead.model_validate(seller)


@router.put(
    "/{seller_id}",
    response_model=SellerRead,
    summary="Update Seller",
    responses={
        404: {"model": ErrorResponse, "description": "Seller not found"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def update_seller(
    seller_id: int, data: SellerUpdate, admin: AdminDep, sellers: SellerServiceDep
) -> SellerRead:
    return SellerRead.model_validate(await sellers.update_seller(seller_id, data))


@router.delete(
    "/{seller_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Seller",
    responses={400: {"model": ErrorResponse, "description": "Seller still owns products"}},
)
async def delete_seller(seller_id: int, admin: AdminDep, sellers: SellerServiceDep) -> None:
    await sellers.delete_seller(seller_id)


@router.put(
    "/{seller_id}/change-password",
    response_model=MessageResponse,
    summary="Change Seller Password",
    description="Change the calling seller's own password after checking the current one.",
    responses={
        401: {"model": ErrorResponse, "description": "Current password is incorrect"},
        403: {"model": ErrorResponse, "description": "Another seller's account"},
    },
)
async def change_password(
    seller_id: int, data: PasswordChange, seller: SellerDep, sellers: SellerServiceDep
) -> MessageResponse:
    if seller.id != seller_id:
        raise PermissionDeniedError("Sellers may only change their own password")
    await sellers.change_password(seller_id, data)
    return MessageResponse(message="Password updated")
