"""
Delivery address entity models.

Each user keeps any number of addresses, at most one of which is primary.
Checkout falls back to the primary address when none is given.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class AddressBase(Base):
    """Base fields for an address."""

    street: str = Field(min_length=1, max_length=150)
    number: str = Field(min_length=1, max_length=20)
    city: str = Field(min_length=1, max_length=100)
    district: Optional[str] = Field(default=None, max_length=100, description="Commune or district")
    postal_code: Optional[str] = Field(default=None, max_length=20)
    country: str = Field(default="Chile", max_length=100)
    is_primary: bool = Field(default=False)


class Address(AddressBase, table=True):
    """Persistent delivery address.

    Table: addresses
    """

    __tablename__ = "addresses"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Address(id={self.id}, user_id={self.user_id}, primary={self.is_primary})"
