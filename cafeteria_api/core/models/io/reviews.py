"""
Review I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PartialUpdate


class ReviewRead(BaseModel):
    """Schema for reading a review."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    product_id: int
    rating: int
    comment: Optional[str] = None
    reviewed_at: datetime


class ReviewCreate(BaseModel):
    """Schema for reviewing a product."""

    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)


class ReviewUpdate(PartialUpdate):
    """Schema for editing a review. Only provided fields change."""

    required_fields = ("rating",)

    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)


class ReviewSummary(BaseModel):
    """Aggregate rating of a product."""

    product_id: int
    count: int
    average_rating: Optional[float] = None
