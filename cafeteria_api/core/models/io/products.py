"""
Product I/O models for API requests and responses.

This module contains Pydantic-based I/O schemas for the product catalog and
product image gallery. Money is accepted as ``Decimal`` and returned as a
JSON number.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PartialUpdate


class ProductImageRead(BaseModel):
    """Schema for reading a gallery image."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    url: str
    description: Optional[str] = None
    position: int


class ProductImageCreate(BaseModel):
    """Schema for appending a gallery image."""

    url: str = Field(min_length=1, max_length=500)
    description: Optional[str] = Field(default=None, max_length=255)


class ProductRead(BaseModel):
    """Schema for reading a product."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int
    seller_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = None
    stock: int
    is_available: bool
    created_at: datetime
    updated_at: datetime


class ProductDetailRead(ProductRead):
    """Product together with its gallery, ordered by position."""

    images: List[ProductImageRead] = Field(default_factory=list)


class ProductCreate(BaseModel):
    """Schema for creating a product."""

    category_id: int
    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(default=None, max_length=500)
    stock: int = Field(default=0, ge=0)
    is_available: bool = True
    extra_images: List[str] = Field(default_factory=list, description="Gallery URLs stored at positions 1..n")


class ProductUpdate(PartialUpdate):
    """Schema for updating a product. Only provided fields change."""

    required_fields = ("category_id", "name", "price", "stock", "is_available")

    category_id: Optional[int] = None
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(default=None, max_length=500)
    stock: Optional[int] = Field(default=None, ge=0)
    is_available: Optional[bool] = None
