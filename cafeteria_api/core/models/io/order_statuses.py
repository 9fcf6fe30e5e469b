"""
Order status I/O models for API requests and responses.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PartialUpdate


class OrderStatusRead(BaseModel):
    """Schema for reading an order status."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None


class OrderStatusCreate(BaseModel):
    """Schema for creating an order status."""

    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=255)


class OrderStatusUpdate(PartialUpdate):
    """Schema for updating an order status."""

    required_fields = ("name",)

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=255)
