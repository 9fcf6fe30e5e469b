"""
Dining table service.

A table's status follows its orders: reconciliation marks an available or
occupied table ``occupied`` while it has active (not delivered, not
cancelled) orders and ``available`` otherwise. Reserved and out-of-service
tables are managed by hand and never reconciled.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.constants import OrderStatusName, TableStatus
from cafeteria_api.core.database.entities.dining_tables import DiningTable
from cafeteria_api.core.database.repositories import build_sql_repos_from_session
from cafeteria_api.core.errors import ConflictError, NotFoundError
from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.models.io.dining_tables import (
    DiningTableCreate,
    DiningTableRead,
    DiningTableUpdate,
    DiningTableWithOrderRead,
)
from cafeteria_api.core.monitoring import log_order_event

from .order_service import OrderService

logger = get_logger(__name__)

RECONCILED_STATUSES = (TableStatus.AVAILABLE, TableStatus.OCCUPIED)


class TableService:
    """Service for dining tables and their link to active orders."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def list_tables(self) -> List[DiningTable]:
        return await self.repos.tables.list_active()

    async def list_available(self) -> List[DiningTable]:
        return await self.repos.tables.list_active(statuses=[TableStatus.AVAILABLE])

    async def get_table(self, table_id: int) -> Optional[DiningTable]:
        return await self.repos.tables.get_by_id(table_id)

    async def _require_table(self, table_id: int) -> DiningTable:
        table = await self.repos.tables.get_by_id(table_id)
        if table is None:
            raise NotFoundError("Table", table_id)
        return table

    async def create_table(self, data: DiningTableCreate) -> DiningTable:
        if await self.repos.tables.get_by_number(data.number):
            raise ConflictError(f"Table number '{data.number}' already exists", code="TABLE_EXISTS")
        return await self.repos.tables.create(DiningTable(**data.model_dump()))

    async def update_table(self, table_id: int, data: DiningTableUpdate) -> DiningTable:
        table = await self._require_table(table_id)
        changes = data.model_dump(exclude_unset=True)
        number = changes.get("number")
        if number is not None and number != table.number and await self.repos.tables.get_by_number(number):
            raise ConflictError(f"Table number '{number}' already exists", code="TABLE_EXISTS")
        for key, value in changes.items():
            setattr(table, key, value)
        return await self.repos.tables.update(table)

    async def deactivate_table(self, table_id: int) -> None:
        table = await self._require_table(table_id)
        table.is_active = False
        await self.repos.tables.update(table)

    async def set_status(self, table_id: int, status: TableStatus) -> DiningTable:
        """
        Change a table's status.

        Releasing a table (moving it to ``available`` from any other status)
        delivers every active order seated at it.
        """
        table = await self._require_table(table_id)
        closed_ids: List[int] = []
        if status == TableStatus.AVAILABLE and table.status != TableStatus.AVAILABLE:
            delivered = await self.repos.order_statuses.get_by_name(OrderStatusName.DELIVERED.value)
            if delivered is None:
                raise NotFoundError("Order status", OrderStatusName.DELIVERED.value)
            final_ids = await self.repos.order_statuses.final_status_ids()
            closed_ids = await self.repos.orders.close_active_for_table(table.id, final_ids, delivered.id)
            for order_id in closed_ids:
                await self.repos.orders.add_history(order_id, delivered.id, f"Table {table.number} released")

        table.status = status
        table = await self.repos.tables.update(table)
        for order_id in closed_ids:
            log_order_event(order_id, "delivered", table_id=table.id)
        logger.info(f"Table {table.number} set to {status.value} ({len(closed_ids)} orders closed)")
        return table

    async def reconcile(self) -> int:
        """
        Align available/occupied tables with their active orders.

        Returns:
            Number of tables whose status changed
        """
        final_ids = await self.repos.order_statuses.final_status_ids()
        changed = 0
        for table in await self.repos.tables.list_active(statuses=list(RECONCILED_STATUSES)):
            active = await self.repos.orders.count_active_for_table(table.id, final_ids)
            desired = TableStatus.OCCUPIED if active else TableStatus.AVAILABLE
            if table.status != desired:
                table.status = desired
                await self.repos.tables.update(table, commit=False)
                changed += 1
        if changed:
            await self.session.commit()
            logger.debug(f"Reconciled {changed} table statuses")
        return changed

    async def list_with_orders(self) -> List[DiningTableWithOrderRead]:
        """Active tables that have active orders, each with its most recent one."""
        await self.reconcile()
        final_ids = await self.repos.order_statuses.final_status_ids()
        orders = OrderService(self.session)

        result: List[DiningTableWithOrderRead] = []
        for table in await self.repos.tables.list_active():
            active = await self.repos.orders.list_active_for_table(table.id, final_ids)
            if not active:
                continue
            view = DiningTableWithOrderRead.model_validate(DiningTableRead.model_validate(table).model_dump())
            view.active_order = await orders.to_read(active[0])
            result.append(view)
        return result
