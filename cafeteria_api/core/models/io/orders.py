"""
Order I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for cart checkout,
point-of-sale orders, status changes and order reads.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cafeteria_api.core.constants import DeliveryType


class OrderItemRead(BaseModel):
    """Schema for reading an order line."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    quantity: int
    unit_price: float
    subtotal: float


class OrderRead(BaseModel):
    """Schema for reading an order with its lines."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[int] = None
    seller_id: Optional[int] = None
    address_id: Optional[int] = None
    table_id: Optional[int] = None
    payment_method_id: int
    order_status_id: int
    status_name: str = Field(description="Name of the current status")
    delivery_type: DeliveryType
    notes: Optional[str] = None
    subtotal: float
    tax: float
    total: float
    ordered_at: datetime
    items: List[OrderItemRead] = Field(default_factory=list)


class OrderHistoryRead(BaseModel):
    """One entry of an order's status history."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    order_status_id: int
    status_name: str
    comment: Optional[str] = None
    changed_at: datetime


class CheckoutRequest(BaseModel):
    """Schema for turning the caller's cart into an order."""

    payment_method_id: int
    address_id: Optional[int] = Field(default=None, description="Defaults to the primary address")
    delivery_type: DeliveryType = DeliveryType.DELIVERY
    notes: Optional[str] = Field(default=None, max_length=1000)


class DirectOrderItem(BaseModel):
    """One line of a point-of-sale order."""

    product_id: int
    quantity: int = Field(ge=1)
    unit_price: Optional[Decimal] = Field(
        default=None, ge=0, max_digits=10, decimal_places=2, description="Defaults to the current product price"
    )


class DirectOrderCreate(BaseModel):
    """Schema for a point-of-sale order entered by staff."""

    items: List[DirectOrderItem] = Field(min_length=1)
    payment_method_id: int
    table_id: Optional[int] = None
    delivery_type: DeliveryType = DeliveryType.LOCAL
    notes: Optional[str] = Field(default=None, max_length=1000)
    user_id: Optional[int] = Field(default=None, description="Customer account, when known")


class OrderStatusChange(BaseModel):
    """Schema for moving an order to another status."""

    order_status_id: int
    comment: Optional[str] = Field(default=None, max_length=500)


class OrderCancel(BaseModel):
    """Schema for cancelling an order."""

    reason: Optional[str] = Field(default=None, max_length=500)
