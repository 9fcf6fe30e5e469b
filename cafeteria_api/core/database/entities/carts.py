"""
Shopping cart entity models.

Every user owns at most one cart. A cart holds one line per product; adding
the same product again merges into the existing line.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from cafeteria_api.core.constants import MAX_CART_QUANTITY, MIN_CART_QUANTITY

from ..base import Base, utc_now


class Cart(Base, table=True):
    """Persistent shopping cart.

    Table: carts
    """

    __tablename__ = "carts"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True, index=True)
    total: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Cart(id={self.id}, user_id={self.user_id}, total={self.total})"


class CartItemBase(Base):
    """Base fields for a cart line."""

    product_id: int = Field(foreign_key="products.id", index=True)
    quantity: int = Field(ge=MIN_CART_QUANTITY, le=MAX_CART_QUANTITY)


class CartItem(CartItemBase, table=True):
    """One product line inside a cart.

    Table: cart_items
    """

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_items_cart_product"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    cart_id: int = Field(foreign_key="carts.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"CartItem(cart_id={self.cart_id}, product_id={self.product_id}, quantity={self.quantity})"
