"""
Seller I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .common import PHONE_PATTERN, PartialUpdate


class SellerRead(BaseModel):
    """Schema for reading a seller."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    hired_at: Optional[date] = None
    is_active: bool
    created_at: datetime


class SellerCreate(BaseModel):
    """Schema for creating a seller account (admin only)."""

    first_name: str = Field(min_length=2, max_length=50)
    last_name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    hired_at: Optional[date] = None


class SellerUpdate(PartialUpdate):
    """Schema for updating a seller. Only provided fields change."""

    required_fields = ("first_name", "last_name", "email", "is_active")

    first_name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    hired_at: Optional[date] = None
    is_active: Optional[bool] = None


class SellerLogin(BaseModel):
    """Schema for seller credential login."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=72)


class SellerTokenResponse(BaseModel):
    """Access token issued to a seller."""

    access_token: str
    token_type: str = "bearer"
    seller: SellerRead
