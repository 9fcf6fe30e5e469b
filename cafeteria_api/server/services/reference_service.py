"""
Reference data service: payment methods and order statuses.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.database.entities.order_statuses import OrderStatus
from cafeteria_api.core.database.entities.payment_methods import PaymentMethod
from cafeteria_api.core.database.repositories import build_sql_repos_from_session
from cafeteria_api.core.errors import BusinessRuleError, ConflictError, NotFoundError
from cafeteria_api.core.models.io.order_statuses import OrderStatusCreate, OrderStatusUpdate
from cafeteria_api.core.models.io.payment_methods import PaymentMethodCreate, PaymentMethodUpdate


class ReferenceDataService:
    """Service for the payment method and order status lookup tables."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    # ==================== PAYMENT METHODS ====================

    async def list_payment_methods(self, active_only: bool = False) -> List[PaymentMethod]:
        return await self.repos.payment_methods.list_methods(active_only=active_only)

    async def get_payment_method(self, method_id: int) -> Optional[PaymentMethod]:
        return await self.repos.payment_methods.get_by_id(method_id)

    async def create_payment_method(self, data: PaymentMethodCreate) -> PaymentMethod:
        if await self.repos.payment_methods.get_by_name(data.name):
            raise ConflictError(f"Payment method '{data.name}' already exists", code="PAYMENT_METHOD_EXISTS")
        return await self.repos.payment_methods.create(PaymentMethod(**data.model_dump()))

    async def update_payment_method(self, method_id: int, data: PaymentMethodUpdate) -> PaymentMethod:
        method = await self.repos.payment_methods.get_by_id(method_id)
        if method is None:
            raise NotFoundError("Payment method", method_id)
        changes = data.model_dump(exclude_unset=True)
        name = changes.get("name")
        if name is not None and name != method.name and await self.repos.payment_methods.get_by_name(name):
            raise ConflictError(f"Payment method '{name}' already exists", code="PAYMENT_METHOD_EXISTS")
        for key, value in changes.items():
            setattr(method, key, value)
        return await self.repos.payment_methods.update(method)

    async def delete_payment_method(self, method_id: int) -> None:
        if await self.repos.payment_methods.get_by_id(method_id) is None:
            raise NotFoundError("Payment method", method_id)
        if await self.repos.orders.count({"payment_method_id": method_id}) > 0:
            raise BusinessRuleError("Payment method is used by orders", code="PAYMENT_METHOD_IN_USE")
        await self.repos.payment_methods.delete(method_id)

    # ==================== ORDER STATUSES ====================

    async def list_order_statuses(self) -> List[OrderStatus]:
        return await self.repos.order_statuses.list()

    async def get_order_status(self, status_id: int) -> Optional[OrderStatus]:
        return await self.repos.order_statuses.get_by_id(status_id)

    async def create_order_status(self, data: OrderStatusCreate) -> OrderStatus:
        if await self.repos.order_statuses.get_by_name(data.name):
            raise ConflictError(f"Order status '{data.name}' already exists", code="ORDER_STATUS_EXISTS")
        return await self.repos.order_statuses.create(OrderStatus(**data.model_dump()))

    async def update_order_status(self, status_id: int, data: OrderStatusUpdate) -> OrderStatus:
        status = await self.repos.order_statuses.get_by_id(status_id)
        if status is None:
            raise NotFoundError("Order status", status_id)
        changes = data.model_dump(exclude_unset=True)
        name = changes.get("name")
        if name is not None and name.lower() != status.name.lower():
            if await self.repos.order_statuses.get_by_name(name):
                raise ConflictError(f"Order status '{name}' already exists", code="ORDER_STATUS_EXISTS")
        for key, value in changes.items():
            setattr(status, key, value)
        return await self.repos.order_statuses.update(status)

    async def delete_order_status(self, status_id: int) -> None:
        if await self.repos.order_statuses.get_by_id(status_id) is None:
            raise NotFoundError("Order status", status_id)
        if await self.repos.orders.count({"order_status_id": status_id}) > 0:
            raise BusinessRuleError("Order status is used by orders", code="ORDER_STATUS_IN_USE")
        await self.repos.order_statuses.delete(status_id)
