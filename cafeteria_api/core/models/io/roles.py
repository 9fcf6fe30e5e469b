"""
Role I/O models for API requests and responses.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PartialUpdate


class RoleRead(BaseModel):
    """Schema for reading a role."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None


class RoleCreate(BaseModel):
    """Schema for creating a role."""

    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=255)


class RoleUpdate(PartialUpdate):
    """Schema for updating a role."""

    required_fields = ("name",)

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=255)


class UserRoleRead(BaseModel):
    """A role granted to a user."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    role_id: int
