"""Order status entity models."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from cafeteria_api.core.constants import FINAL_ORDER_STATUSES

from ..base import Base


class OrderStatusBase(Base):
    """Base fields for an order status."""

    name: str = Field(min_length=1, max_length=50, unique=True, index=True)
    description: Optional[str] = Field(default=None, max_length=255)


class OrderStatus(OrderStatusBase, table=True):
    """Persistent order status.

    Table: order_statuses
    """

    __tablename__ = "order_statuses"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    @property
    def is_final(self) -> bool:
        """Delivered and cancelled orders accept no further transitions."""
        return self.name.lower() in {status.value for status in FINAL_ORDER_STATUSES}

    def __repr__(self) -> str:
        return f"OrderStatus(id={self.id}, name={self.name})"
