"""
Order endpoints.

Customers check out their cart and follow their own orders. Sellers and
admins see every order and enter point-of-sale orders. Admins move orders
between statuses.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Query, status

from cafeteria_api.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from cafeteria_api.core.models.io.common import ErrorResponse, Page
from cafeteria_api.core.models.io.orders import (
    CheckoutRequest,
    DirectOrderCreate,
    OrderCancel,
    OrderHistoryRead,
    OrderRead,
    OrderStatusChange,
)
from cafeteria_api.server.services.deps import AdminDep, OrderServiceDep, PrincipalDep, StaffDep, UserDep

router = APIRouter(tags=["orders"])


@router.get(
    "",
    response_model=Page[OrderRead],
    summary="List Orders",
    description="List orders newest first. Customers only see their own orders; sellers and admins see all.",
)
async def list_orders(
    principal: PrincipalDep,
    orders: OrderServiceDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    order_status_id: Optional[int] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> Page[OrderRead]:
    filters = {"order_status_id": order_status_id, "date_from": date_from, "date_to": date_to}
    items, total = await orders.list_orders(principal, filters, limit=page_size, offset=(page - 1) * page_size)
    return Page[OrderRead].build(items, total, page, page_size)


@router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Checkout Cart",
    description="Turn the caller's cart into a pending order. Stock is decremented and the cart is emptied.",
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Empty cart, missing or foreign address, invalid payment method, or insufficient stock",
        },
    },
)
async def checkout(data: CheckoutRequest, principal: UserDep, orders: OrderServiceDep) -> OrderRead:
    """
    Checkout.

    - **payment_method_id**: An active payment method.
    - **address_id**: Delivery address; defaults to the caller's primary address.
    - **notes**: Free text for the kitchen or courier.
    """
    return await orders.checkout(principal.id, data)


@router.post(
    "/direct",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Point-of-Sale Order",
    description=(
        "Enter an order at the counter or a table. Allowed for sellers and admins. "
        "A given table must be active and becomes occupied."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Inactive table, invalid payment method or insufficient stock"},
        404: {"model": ErrorResponse, "description": "Product, table or customer not found"},
    },
)
async def create_direct_order(data: DirectOrderCreate, staff: StaffDep, orders: OrderServiceDep) -> OrderRead:
    return await orders.create_direct(staff, data)


@router.get(
    "/{order_id}",
    response_model=OrderRead,
    summary="Get Order",
    responses={
        403: {"model": ErrorResponse, "description": "Order belongs to another user"},
        404: {"model": ErrorResponse, "description": "Order not found"},
    },
)
async def get_order(order_id: int, principal: PrincipalDep, orders: OrderServiceDep) -> OrderRead:
    return await orders.get_order(order_id, principal)


@router.get(
    "/{order_id}/history",
    response_model=List[OrderHistoryRead],
    summary="Order Status History",
    description="Status changes of an order, oldest first.",
)
async def get_order_history(
    order_id: int, principal: PrincipalDep, orders: OrderServiceDep
) -> List[OrderHistoryRead]:
    return await orders.get_history(order_id, principal)


@router.put(
    "/{order_id}/status",
    response_model=OrderRead,
    summary="Change Order Status",
    responses={404: {"model": ErrorResponse, "description": "Order or status not found"}},
)
async def change_order_status(
    order_id: int, data: OrderStatusChange, admin: AdminDep, orders: OrderServiceDep
) -> OrderRead:
    return await orders.change_status(order_id, data)


@router.post(
    "/{order_id}/cancel",
    response_model=OrderRead,
    summary="Cancel Order",
    description="Cancel an open order and restore its stock. Allowed for the owner and admins.",
    responses={
        400: {"model": ErrorResponse, "description": "Order already delivered or cancelled"},
        403: {"model": ErrorResponse, "description": "Not the owner"},
    },
)
async def cancel_order(
    order_id: int, principal: PrincipalDep, orders: OrderServiceDep, data: Optional[OrderCancel] = None
) -> OrderRead:
    return await orders.cancel(order_id, principal, data or OrderCancel())
