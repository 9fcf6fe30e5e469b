"""Product review entity models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now


class ReviewBase(Base):
    """Base fields for a review."""

    rating: int = Field(ge=1, le=5, description="Star rating from 1 to 5")
    comment: Optional[str] = Field(default=None)


class Review(ReviewBase, table=True):
    """Persistent product review, one per user and product.

    Table: reviews
    """

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_reviews_user_product"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    reviewed_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Review(id={self.id}, product_id={self.product_id}, rating={self.rating})"
