"""
Order status endpoints. Reads are public; writes are admin only.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from cafeteria_api.core.models.io.common import ErrorResponse
from cafeteria_api.core.models.io.order_statuses import OrderStatusCreate, OrderStatusRead, OrderStatusUpdate
from cafeteria_api.server.services.deps import AdminDep, ReferenceServiceDep

router = APIRouter(tags=["order-statuses"])


@router.get("", response_model=List[OrderStatusRead], summary="List Order Statuses")
async def list_order_statuses(reference: ReferenceServiceDep) -> List[OrderStatusRead]:
    return [OrderStatusRead.model_validate(s) for s in await reference.list_order_statuses()]


@router.get(
    "/{status_id}",
    response_model=OrderStatusRead,
    summary="Get Order Status",
    responses={404: {"model": ErrorResponse, "description": "Order status not found"}},
)
async def get_order_status(status_id: int, reference: ReferenceServiceDep) -> OrderStatusRead:
    order_status = await reference.get_order_status(status_id)
    if order_status is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Order status {status_id} not found")
    return OrderStatusRead.model_validate(order_status)


@router.post(
    "",
    response_model=OrderStatusRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Order Status",
    responses={409: {"model": ErrorResponse, "description": "Name already exists"}},
)
async def create_order_status(
    data: OrderStatusCreate, admin: AdminDep, reference: ReferenceServiceDep
) -> OrderStatusRead:
    return OrderStatusRead.model_validate(await reference.create_order_status(data))


@router.put("/{status_id}", response_model=OrderStatusRead, summary="Update Order Status")
async def update_order_status(
    status_id: int, data: OrderStatusUpdate, admin: AdminDep, reference: ReferenceServiceDep
) -> OrderStatusRead:
    return OrderStatusRead.model_validate(await reference.update_order_status(status_id, data))


@router.delete(
    "/{status_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Order Status",
    responses={400: {"model": ErrorResponse, "description": "Status is used by orders"}},
)
async def delete_order_status(status_id: int, admin: AdminDep, reference: ReferenceServiceDep) -> None:
    await reference.delete_order_status(status_id)
