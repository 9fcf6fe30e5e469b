"""
Dining table I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cafeteria_api.core.constants import TableStatus

from .common import PartialUpdate
from .orders import OrderRead


class DiningTableRead(BaseModel):
    """Schema for reading a dining table."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    number: str
    capacity: int
    location: Optional[str] = None
    status: TableStatus
    is_active: bool
    updated_at: datetime


class DiningTableWithOrderRead(DiningTableRead):
    """Table together with its most recent active order."""

    active_order: Optional[OrderRead] = None


class DiningTableCreate(BaseModel):
    """Schema for creating a dining table."""

    number: str = Field(min_length=1, max_length=10)
    capacity: int = Field(default=4, ge=1, le=20)
    location: Optional[str] = Field(default=None, max_length=100)
    status: TableStatus = TableStatus.AVAILABLE


class DiningTableUpdate(PartialUpdate):
    """Schema for updating a dining table. Only provided fields change."""

    required_fields = ("number", "capacity", "is_active")

    number: Optional[str] = Field(default=None, min_length=1, max_length=10)
    capacity: Optional[int] = Field(default=None, ge=1, le=20)
    location: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None


class DiningTableStatusUpdate(BaseModel):
    """Schema for changing a table's status."""

    status: TableStatus
