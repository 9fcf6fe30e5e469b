"""
Product catalog entity models.

This module contains the database entities for sellable products and the
ordered gallery of extra images attached to each product.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class ProductBase(Base):
    """Base fields for a product."""

    name: str = Field(min_length=2, max_length=100, index=True)
    description: Optional[str] = Field(default=None)
    price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(default=None, max_length=500, description="Main picture")
    stock: int = Field(default=0, ge=0, description="Units on hand")
    is_available: bool = Field(default=True, description="Hidden from ordering when false")


class Product(ProductBase, table=True):
    """Persistent product.

    Table: products
    """

    __tablename__ = "products"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    category_id: int = Field(foreign_key="categories.id", index=True)
    seller_id: Optional[int] = Field(default=None, foreign_key="sellers.id", index=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def can_supply(self, quantity: int) -> bool:
        """Whether ``quantity`` units can be sold right now."""
        return self.is_available and self.stock >= quantity

    def __repr__(self) -> str:
        return f"Product(id={self.id}, name={self.name}, price={self.price}, stock={self.stock})"


class ProductImage(Base, table=True):
    """Extra gallery image for a product, ordered by ``position``.

    Table: product_images
    """

    __tablename__ = "product_images"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    url: str = Field(max_length=500)
    description: Optional[str] = Field(default=None, max_length=255)
    position: int = Field(default=0, ge=0)

    def __repr__(self) -> str:
        return f"ProductImage(id={self.id}, product_id={self.product_id}, position={self.position})"
