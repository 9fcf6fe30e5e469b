"""
User account I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for registration, login,
profile management and user administration.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .common import PHONE_PATTERN, PartialUpdate


class UserRead(BaseModel):
    """Schema for reading a user account from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    is_active: bool
    role: str = Field(description="Primary role name")
    registered_at: datetime


class UserAdminRead(UserRead):
    """User as seen by administrators, with every effective role."""

    roles: List[str] = Field(default_factory=list, description="Primary role plus assigned roles")


class UserRegister(BaseModel):
    """Schema for self-registration."""

    first_name: str = Field(min_length=2, max_length=50)
    last_name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    birth_date: Optional[date] = None


class UserLogin(BaseModel):
    """Schema for credential login."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=72)


class UserProfileUpdate(PartialUpdate):
    """Schema for updating one's own profile. Only provided fields change."""

    required_fields = ("first_name", "last_name", "email")

    first_name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    birth_date: Optional[date] = None


class PasswordChange(BaseModel):
    """Schema for changing a password."""

    current_password: str = Field(min_length=1, max_length=72)
    new_password: str = Field(min_length=6, max_length=72)


class UserStatusUpdate(BaseModel):
    """Schema for activating or deactivating a user."""

    is_active: bool


class TokenResponse(BaseModel):
    """Access token issued to a user."""

    access_token: str
    token_type: str = "bearer"
    user: UserRead
