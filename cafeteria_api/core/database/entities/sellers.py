"""
Seller entity models.

Sellers are counter staff with their own credentials. They may own products
and take point-of-sale orders.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class SellerBase(Base):
    """Base fields for a seller."""

    first_name: str = Field(min_length=2, max_length=50)
    last_name: str = Field(min_length=2, max_length=50)
    email: str = Field(max_length=255, unique=True, index=True)
    phone: Optional[str] = Field(default=None, max_length=20)
    hired_at: Optional[date] = Field(default=None, description="Hiring date")
    is_active: bool = Field(default=True)


class Seller(SellerBase, table=True):
    """Persistent seller account.

    Table: sellers
    """

    __tablename__ = "sellers"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str = Field(max_length=255)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Seller(id={self.id}, email={self.email})"
