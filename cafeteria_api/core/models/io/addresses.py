"""
Address I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PartialUpdate


class AddressRead(BaseModel):
    """Schema for reading an address from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    street: str
    number: str
    city: str
    district: Optional[str] = None
    postal_code: Optional[str] = None
    country: str
    is_primary: bool
    created_at: datetime


class AddressCreate(BaseModel):
    """Schema for adding an address."""

    street: str = Field(min_length=1, max_length=150)
    number: str = Field(min_length=1, max_length=20)
    city: str = Field(min_length=1, max_length=100)
    district: Optional[str] = Field(default=None, max_length=100)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    country: str = Field(default="Chile", max_length=100)
    is_primary: bool = False


class AddressUpdate(PartialUpdate):
    """Schema for updating an address. Only provided fields change."""

    required_fields = ("street", "number", "city", "country")

    street: Optional[str] = Field(default=None, min_length=1, max_length=150)
    number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    district: Optional[str] = Field(default=None, max_length=100)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    country: Optional[str] = Field(default=None, max_length=100)
