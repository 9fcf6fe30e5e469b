"""
Payment method endpoints. Reads are public; writes are admin only.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from cafeteria_api.core.models.io.common import ErrorResponse
from cafeteria_api.core.models.io.payment_methods import (
    PaymentMethodCreate,
    PaymentMethodRead,
    PaymentMethodUpdate,
)
from cafeteria_api.server.services.deps import AdminDep, ReferenceServiceDep

router = APIRouter(tags=["payment-methods"])


@router.get("", response_model=List[PaymentMethodRead], summary="List Payment Methods")
async def list_payment_methods(reference: ReferenceServiceDep, active_only: bool = False) -> List[PaymentMethodRead]:
    """
    List payment methods ordered by name.

    - **active_only**: Only return methods that can currently be used at checkout.
    """
    return [PaymentMethodRead.model_validate(m) for m in await reference.list_payment_methods(active_only)]


@router.get(
    "/{method_id}",
    response_model=PaymentMethodRead,
    summary="Get Payment Method",
    responses={404: {"model": ErrorResponse, "description": "Payment method not found"}},
)
async def get_payment_method(method_id: int, reference: ReferenceServiceDep) -> PaymentMethodRead:
    method = await reference.get_payment_method(method_id)
    if method is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Payment method {method_id} not found")
    return PaymentMethodRead.model_validate(method)


@router.post(
    "",
    response_model=PaymentMethodRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Payment Method",
    responses={409: {"model": ErrorResponse, "description": "Name already exists"}},
)
async def create_payment_method(
    data: PaymentMethodCreate, admin: AdminDep, reference: ReferenceServiceDep
) -> PaymentMethodRead:
    return PaymentMethodRead.model_validate(await reference.create_payment_method(data))


@router.put("/{method_id}", response_model=PaymentMethodRead, summary="Update Payment Method")
async def update_payment_method(
    method_id: int, data: PaymentMethodUpdate, admin: AdminDep, reference: ReferenceServiceDep
) -> PaymentMethodRead:
    return PaymentMethodRead.model_validate(await reference.update_payment_method(method_id, data))


@router.delete(
    "/{method_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Payment Method",
    responses={400: {"model": ErrorResponse, "description": "Method is used by orders"}},
)
async def delete_payment_method(method_id: int, admin: AdminDep, reference: ReferenceServiceDep) -> None:
    await reference.delete_payment_method(method_id)
