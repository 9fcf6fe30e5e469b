"""
Shopping cart endpoints for the calling user.

The cart is created on first access. Every mutation returns the whole cart
with its recomputed total.
"""

from fastapi import APIRouter

from cafeteria_api.core.models.io.carts import CartItemAdd, CartItemUpdate, CartRead
from cafeteria_api.core.models.io.common import ErrorResponse
from cafeteria_api.server.services.deps import CartServiceDep, UserDep

router = APIRouter(tags=["carts"])


@router.get(
    "",
    response_model=CartRead,
    summary="Get Cart",
    description="Return the caller's cart with its lines and total, creating it if needed.",
)
async def get_cart(principal: UserDep, carts: CartServiceDep) -> CartRead:
    return await carts.get_cart(principal.id)


@router.post(
    "/items",
    response_model=CartRead,
    summary="Add Cart Item",
    description="Add a product to the cart. Adding a product already in the cart merges the quantities.",
    responses={
        400: {"model": ErrorResponse, "description": "Unavailable product, insufficient stock or quantity limit"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def add_item(data: CartItemAdd, principal: UserDep, carts: CartServiceDep) -> CartRead:
    """
    Add an item.

    - **product_id**: The product to add.
    - **quantity**: Units to add, 1 to 10. The merged line may not exceed 10 units or the stock on hand.
    """
    return await carts.add_item(principal.id, data)


@router.put(
    "/items",
    response_model=CartRead,
    summary="Update Cart Item",
    description="Set the quantity of a line. Quantity 0 removes the line.",
    responses={
        400: {"model": ErrorResponse, "description": "Insufficient stock or quantity limit"},
        404: {"model": ErrorResponse, "description": "Product not in the cart"},
    },
)
async def update_item(data: CartItemUpdate, principal: UserDep, carts: CartServiceDep) -> CartRead:
    return await carts.update_item(principal.id, data)


@router.delete(
    "/items/{product_id}",
    response_model=CartRead,
    summary="Remove Cart Item",
    responses={404: {"model": ErrorResponse, "description": "Product not in the cart"}},
)
async def remove_item(product_id: int, principal: UserDep, carts: CartServiceDep) -> CartRead:
    return await carts.remove_item(principal.id, product_id)


@router.delete("", response_model=CartRead, summary="Empty Cart")
async def clear_cart(principal: UserDep, carts: CartServiceDep) -> CartRead:
    return await carts.clear(principal.id)
