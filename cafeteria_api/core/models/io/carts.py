"""
Cart I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from cafeteria_api.core.constants import MAX_CART_QUANTITY, MIN_CART_QUANTITY


class CartItemRead(BaseModel):
    """One line of the cart with current product pricing."""

    product_id: int
    product_name: str
    image_url: Optional[str] = None
    unit_price: float
    quantity: int
    subtotal: float


class CartRead(BaseModel):
    """The caller's cart."""

    id: int
    user_id: int
    items: List[CartItemRead] = Field(default_factory=list)
    item_count: int = Field(description="Sum of quantities over every line")
    total: float
    updated_at: datetime


class CartItemAdd(BaseModel):
    """Schema for adding a product to the cart."""

    product_id: int
    quantity: int = Field(default=1, ge=MIN_CART_QUANTITY, le=MAX_CART_QUANTITY)


class CartItemUpdate(BaseModel):
    """Schema for setting a line quantity. Zero removes the line."""

    product_id: int
    quantity: int = Field(ge=0, le=MAX_CART_QUANTITY)
