"""Payment method entity models."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from ..base import Base


class PaymentMethodBase(Base):
    """Base fields for a payment method."""

    name: str = Field(min_length=1, max_length=50, unique=True, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)


class PaymentMethod(PaymentMethodBase, table=True):
    """Persistent payment method.

    Table: payment_methods
    """

    __tablename__ = "payment_methods"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    def __repr__(self) -> str:
        return f"PaymentMethod(id={self.id}, name={self.name})"
