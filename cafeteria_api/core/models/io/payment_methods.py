"""
Payment method I/O models for API requests and responses.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PartialUpdate


class PaymentMethodRead(BaseModel):
    """Schema for reading a payment method."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    is_active: bool


class PaymentMethodCreate(BaseModel):
    """Schema for creating a payment method."""

    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = True


class PaymentMethodUpdate(PartialUpdate):
    """Schema for updating a payment method."""

    required_fields = ("name", "is_active")

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: Optional[bool] = None
