"""
Dining table entity models.

Tables are referenced by point-of-sale orders. Their status is kept in step
with the orders seated at them: a table with active orders is occupied.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field

from cafeteria_api.core.constants import TableStatus

from ..base import Base, utc_now


class DiningTableBase(Base):
    """Base fields for a dining table."""

    number: str = Field(min_length=1, max_length=10, unique=True, index=True, description="Label shown to staff")
    capacity: int = Field(default=4, ge=1, le=20)
    location: Optional[str] = Field(default=None, max_length=100)
    status: TableStatus = Field(default=TableStatus.AVAILABLE, sa_type=sa.String(20))
    is_active: bool = Field(default=True, description="Soft-delete flag")


class DiningTable(DiningTableBase, table=True):
    """Persistent dining table.

    Table: dining_tables
    """

    __tablename__ = "dining_tables"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"DiningTable(id={self.id}, number={self.number}, status={self.status})"
