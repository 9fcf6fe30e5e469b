"""
Category I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PartialUpdate


class CategoryRead(BaseModel):
    """Schema for reading a category."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=500)


class CategoryUpdate(PartialUpdate):
    """Schema for updating a category. Only provided fields change."""

    required_fields = ("name",)

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=500)
