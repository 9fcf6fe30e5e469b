"""
Order repository interface and implementation.

This module provides data access operations for orders, their lines and
their status history, including the filtered listing used by customers and
staff and the table-scoped queries used to keep dining tables in sync.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.orders import Order, OrderItem, OrderStatusHistory
from .base import QueryBuilder, SQLModelRepository


class OrderRepository(SQLModelRepository[Order]):
    """Repository for order data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Order)

    @staticmethod
    def _apply_search(stmt, filters: Optional[Dict[str, Any]]):
        if not filters:
            return stmt
        stmt = QueryBuilder.apply_filters(
            stmt,
            Order,
            {
                "user_id": filters.get("user_id"),
                "order_status_id": filters.get("order_status_id"),
                "table_id": filters.get("table_id"),
                "payment_method_id": filters.get("payment_method_id"),
            },
        )
        date_from: Optional[datetime] = filters.get("date_from")
        date_to: Optional[datetime] = filters.get("date_to")
        if date_from is not None:
            stmt = stmt.where(Order.ordered_at >= date_from)
        if date_to is not None:
            stmt = stmt.where(Order.ordered_at <= date_to)
        return stmt

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Order]:
        """List orders, newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (user_id, order_status_id, table_id, payment_method_id, date_from, date_to)

        Returns:
            List of Order instances
        """
        stmt = self._apply_search(select(Order), filters).order_by(Order.ordered_at.desc(), Order.id.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        stmt = self._apply_search(select(func.count()).select_from(Order), filters)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    # ------------------------------------------------------------------
    # Lines and history
    # ------------------------------------------------------------------

    async def list_items(self, order_id: int) -> List[OrderItem]:
        stmt = select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_item(self, item: OrderItem) -> OrderItem:
        """Stage an order line. Only flushes; the caller commits."""
        self.session.add(item)
        await self.session.flush()
        return item

    async def list_history(self, order_id: int) -> List[OrderStatusHistory]:
        stmt = (
            select(OrderStatusHistory)
            .where(OrderStatusHistory.order_id == order_id)
            .order_by(OrderStatusHistory.changed_at, OrderStatusHistory.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_history(self, order_id: int, order_status_id: int, comment: Optional[str]) -> OrderStatusHistory:
        """Stage a status history entry. Only flushes; the caller commits."""
        entry = OrderStatusHistory(order_id=order_id, order_status_id=order_status_id, comment=comment)
        self.session.add(entry)
        await self.session.flush()
        return entry

    # ------------------------------------------------------------------
    # Dining table queries
    # ------------------------------------------------------------------

    async def list_active_for_table(self, table_id: int, closed_status_ids: List[int]) -> List[Order]:
        """Orders seated at a table that are not in a closed status, newest first."""
        stmt = select(Order).where(Order.table_id == table_id)
        if closed_status_ids:
            stmt = stmt.where(Order.order_status_id.not_in(closed_status_ids))
        stmt = stmt.order_by(Order.ordered_at.desc(), Order.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_active_for_table(self, table_id: int, closed_status_ids: List[int]) -> int:
        stmt = select(func.count()).select_from(Order).where(Order.table_id == table_id)
        if closed_status_ids:
            stmt = stmt.where(Order.order_status_id.not_in(closed_status_ids))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def close_active_for_table(self, table_id: int, closed_status_ids: List[int], new_status_id: int) -> List[int]:
        """Move every active order at a table to ``new_status_id``.

        Only flushes; the caller commits.

        Returns:
            Ids of the orders that changed
        """
        orders = await self.list_active_for_table(table_id, closed_status_ids)
        order_ids = [order.id for order in orders]
        if order_ids:
            await self.session.execute(
                update(Order).where(Order.id.in_(order_ids)).values(order_status_id=new_status_id)
            )
        return order_ids
