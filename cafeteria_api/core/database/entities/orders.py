"""
Order entity models.

This module contains the database entities for placed orders, their product
lines, and the audit trail of status changes. Orders come from two paths: a
customer checking out a cart, or staff entering a point-of-sale order that may
be tied to a dining table.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field

from cafeteria_api.core.constants import DeliveryType

from ..base import Base, utc_now


class Order(Base, table=True):
    """Persistent order header with computed money totals.

    Table: orders
    """

    __tablename__ = "orders"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    # Who and where
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    seller_id: Optional[int] = Field(default=None, foreign_key="sellers.id", index=True)
    address_id: Optional[int] = Field(default=None, foreign_key="addresses.id")
    table_id: Optional[int] = Field(default=None, foreign_key="dining_tables.id", index=True)
    cart_id: Optional[int] = Field(default=None, foreign_key="carts.id")

    payment_method_id: int = Field(foreign_key="payment_methods.id")
    order_status_id: int = Field(foreign_key="order_statuses.id", index=True)
    delivery_type: str = Field(default=DeliveryType.DELIVERY.value, max_length=20)
    notes: Optional[str] = Field(default=None)

    # Money
    subtotal: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    tax: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    total: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)

    # Timestamps
    ordered_at: datetime = Field(default_factory=utc_now, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Order(id={self.id}, user_id={self.user_id}, status={self.order_status_id}, total={self.total})"


class OrderItem(Base, table=True):
    """One product line of an order, with the unit price frozen at order time.

    Table: order_items
    """

    __tablename__ = "order_items"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    quantity: int = Field(ge=1)
    unit_price: Decimal = Field(max_digits=10, decimal_places=2)
    subtotal: Decimal = Field(max_digits=10, decimal_places=2)

    def __repr__(self) -> str:
        return f"OrderItem(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})"


class OrderStatusHistory(Base, table=True):
    """Audit entry written every time an order changes status.

    Table: order_status_history
    """

    __tablename__ = "order_status_history"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    order_status_id: int = Field(foreign_key="order_statuses.id")
    comment: Optional[str] = Field(default=None)
    changed_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"OrderStatusHistory(order_id={self.order_id}, status={self.order_status_id})"
