"""
Product repository interface and implementation.

This module provides data access operations for the product catalog,
including filtered search and the per-product image gallery.
Built exclusively on SQLModel for type-safe ORM operations.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.orders import OrderItem
from ..entities.products import Product, ProductImage
from .base import QueryBuilder, SQLModelRepository


class ProductRepository(SQLModelRepository[Product]):
    """Repository for product data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Product)

    @staticmethod
    def _apply_search(stmt, filters: Optional[Dict[str, Any]]):
        if not filters:
            return stmt
        stmt = QueryBuilder.apply_filters(
            stmt,
            Product,
            {
                "category_id": filters.get("category_id"),
                "seller_id": filters.get("seller_id"),
                "is_available": filters.get("is_available"),
            },
        )
        # Handle search with ILIKE for partial matching
        if filters.get("search"):
            stmt = stmt.where(Product.name.ilike(f"%{filters['search']}%"))
        return stmt

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Product]:
        """List products ordered by name with optional pagination and filtering.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (category_id, seller_id, is_available, search)

        Returns:
            List of Product instances
        """
        stmt = self._apply_search(select(Product), filters).order_by(Product.name, Product.id)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        stmt = self._apply_search(select(func.count()).select_from(Product), filters)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def get_many(self, product_ids: List[int]) -> Dict[int, Product]:
        """Load several products at once, keyed by id."""
        if not product_ids:
            return {}
        stmt = select(Product).where(Product.id.in_(set(product_ids)))
        result = await self.session.execute(stmt)
        return {product.id: product for product in result.scalars().all()}

    async def is_ordered(self, product_id: int) -> bool:
        """Whether any order line references the product."""
        stmt = select(func.count()).select_from(OrderItem).where(OrderItem.product_id == product_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one()) > 0


class ProductImageRepository(SQLModelRepository[ProductImage]):
    """Repository for the product image gallery."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ProductImage)

    async def list_for_product(self, product_id: int) -> List[ProductImage]:
        stmt = (
            select(ProductImage)
            .where(ProductImage.product_id == product_id)
            .order_by(ProductImage.position, ProductImage.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_product(self, image_id: int, product_id: int) -> Optional[ProductImage]:
        stmt = select(ProductImage).where(ProductImage.id == image_id, ProductImage.product_id == product_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def next_position(self, product_id: int) -> int:
        """Position for an appended image: one past the current maximum, or 1."""
        stmt = select(func.max(ProductImage.position)).where(ProductImage.product_id == product_id)
        result = await self.session.execute(stmt)
        current = result.scalar_one_or_none()
        return (current or 0) + 1

    async def delete_for_product(self, product_id: int) -> None:
        """Remove a product's whole gallery. Only flushes; the caller commits."""
        await self.session.execute(delete(ProductImage).where(ProductImage.product_id == product_id))
