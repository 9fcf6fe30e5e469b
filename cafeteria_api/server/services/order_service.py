"""
Order service.

Orders are created two ways: a customer checks out their cart, or staff
enter a point-of-sale order, optionally seated at a dining table. Both
paths check and decrement stock, price the lines, add 16% tax, and record
the first status history entry in a single transaction.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.constants import TAX_RATE, OrderStatusName, PrincipalKind, TableStatus, quantize_money
from cafeteria_api.core.database.entities.orders import Order, OrderItem
from cafeteria_api.core.database.entities.order_statuses import OrderStatus
from cafeteria_api.core.database.entities.products import Product
from cafeteria_api.core.database.repositories import build_sql_repos_from_session
from cafeteria_api.core.errors import BusinessRuleError, NotFoundError, PermissionDeniedError
from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.models.io.orders import (
    CheckoutRequest,
    DirectOrderCreate,
    OrderCancel,
    OrderHistoryRead,
    OrderItemRead,
    OrderRead,
    OrderStatusChange,
)
from cafeteria_api.core.monitoring import log_order_event

from .auth_service import Principal

logger = get_logger(__name__)


def compute_totals(subtotal: Decimal) -> Tuple[Decimal, Decimal, Decimal]:
    """Return ``(subtotal, tax, total)`` rounded to cents."""
    subtotal = quantize_money(subtotal)
    tax = quantize_money(subtotal * TAX_RATE)
    return subtotal, tax, subtotal + tax


class OrderService:
    """Service for placing, reading and progressing orders."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    # ==================== READ MODELS ====================

    async def _status_names(self) -> Dict[int, str]:
        statuses = await self.repos.order_statuses.list()
        return {status.id: status.name for status in statuses}

    async def to_read(self, order: Order, status_names: Optional[Dict[int, str]] = None) -> OrderRead:
        if status_names is None:
            status_names = await self._status_names()
        items = await self.repos.orders.list_items(order.id)
        return OrderRead(
            id=order.id,
            user_id=order.user_id,
            seller_id=order.seller_id,
            address_id=order.address_id,
            table_id=order.table_id,
            payment_method_id=order.payment_method_id,
            order_status_id=order.order_status_id,
            status_name=status_names.get(order.order_status_id, "unknown"),
            delivery_type=order.delivery_type,
            notes=order.notes,
            subtotal=float(order.subtotal),
            tax=float(order.tax),
            total=float(order.total),
            ordered_at=order.ordered_at,
            items=[OrderItemRead.model_validate(item) for item in items],
        )

    async def to_reads(self, orders: Iterable[Order]) -> List[OrderRead]:
        status_names = await self._status_names()
        return [await self.to_read(order, status_names) for order in orders]

    # ==================== QUERIES ====================

    async def list_orders(
        self, principal: Principal, filters: Dict[str, Any], limit: Optional[int] = None, offset: Optional[int] = None
    ) -> Tuple[List[OrderRead], int]:
        """Customers see their own orders; staff see every order."""
        filters = dict(filters)
        if not principal.is_staff:
            filters["user_id"] = principal.id
        orders = await self.repos.orders.list(limit=limit, offset=offset, filters=filters)
        total = await self.repos.orders.count(filters)
        return await self.to_reads(orders), total

    async def _require_order(self, order_id: int) -> Order:
        order = await self.repos.orders.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    @staticmethod
    def _is_owner(order: Order, principal: Principal) -> bool:
        return principal.kind == PrincipalKind.USER and order.user_id == principal.id

    async def _require_visible(self, order_id: int, principal: Principal) -> Order:
        order = await self._require_order(order_id)
        if not (self._is_owner(order, principal) or principal.is_staff):
            raise PermissionDeniedError("Order belongs to another user")
        return order

    async def get_order(self, order_id: int, principal: Principal) -> OrderRead:
        return await self.to_read(await self._require_visible(order_id, principal))

    async def get_history(self, order_id: int, principal: Principal) -> List[OrderHistoryRead]:
        await self._require_visible(order_id, principal)
        status_names = await self._status_names()
        return [
            OrderHistoryRead(
                id=entry.id,
                order_id=entry.order_id,
                order_status_id=entry.order_status_id,
                status_name=status_names.get(entry.order_status_id, "unknown"),
                comment=entry.comment,
                changed_at=entry.changed_at,
            )
            for entry in await self.repos.orders.list_history(order_id)
        ]

    # ==================== SHARED STEPS ====================

    async def _require_status(self, name: OrderStatusName) -> OrderStatus:
        status = await self.repos.order_statuses.get_by_name(name.value)
        if status is None:
            raise NotFoundError("Order status", name.value)
        return status

    async def _require_payment_method(self, payment_method_id: int) -> None:
        method = await self.repos.payment_methods.get_by_id(payment_method_id)
        if method is None or not method.is_active:
            raise BusinessRuleError(
                "Payment method is not valid", code="INVALID_PAYMENT_METHOD", details={"id": payment_method_id}
            )

    @staticmethod
    def _check_stock(product: Product, quantity: int) -> None:
        if not product.can_supply(quantity):
            raise BusinessRuleError(
                f"Insufficient stock for '{product.name}'",
                code="INSUFFICIENT_STOCK",
                details={"product_id": product.id, "available": product.stock, "requested": quantity},
            )

    async def _place(
        self, order: Order, lines: List[Tuple[Product, int, Decimal]], status: OrderStatus, comment: str
    ) -> Order:
        """Price and persist the order, its lines and history, and decrement stock. Does not commit."""
        subtotal = sum((unit_price * quantity for _, quantity, unit_price in lines), Decimal("0"))
        order.subtotal, order.tax, order.total = compute_totals(subtotal)
        order.order_status_id = status.id

        order = await self.repos.orders.create(order, commit=False)
        for product, quantity, unit_price in lines:
            await self.repos.orders.add_item(
                OrderItem(
                    order_id=order.id,
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=unit_price,
                    subtotal=quantize_money(unit_price * quantity),
                )
            )
            product.stock -= quantity
            await self.repos.products.update(product, commit=False)
        await self.repos.orders.add_history(order.id, status.id, comment)
        return order

    # ==================== CHECKOUT ====================

    async def checkout(self, user_id: int, data: CheckoutRequest) -> OrderRead:
        """
        Turn the user's cart into a pending order and empty the cart.

        Raises:
            BusinessRuleError: Empty cart, bad address, bad payment method or insufficient stock
        """
        cart = await self.repos.carts.get_by_user(user_id)
        lines = await self.repos.carts.list_items_with_products(cart.id) if cart else []
        if not lines:
            raise BusinessRuleError("Cart is empty", code="EMPTY_CART")

        if data.address_id is not None:
            address = await self.repos.addresses.get_by_id(data.address_id)
            if address is None or address.user_id != user_id:
                raise BusinessRuleError("Address does not belong to the user", code="INVALID_ADDRESS")
        else:
            address = await self.repos.addresses.get_primary(user_id)
            if address is None:
                raise BusinessRuleError("No delivery address given and no primary address set", code="NO_ADDRESS")

        await self._require_payment_method(data.payment_method_id)
        for item, product in lines:
            self._check_stock(product, item.quantity)

        pending = await self._require_status(OrderStatusName.PENDING)
        order = Order(
            user_id=user_id,
            address_id=address.id,
            cart_id=cart.id,
            payment_method_id=data.payment_method_id,
            order_status_id=pending.id,
            delivery_type=data.delivery_type.value,
            notes=data.notes,
        )
        try:
            order = await self._place(
                order, [(product, item.quantity, product.price) for item, product in lines], pending, "Order created"
            )
            await self.repos.carts.clear(cart.id)
            cart.total = Decimal("0")
            await self.repos.carts.update(cart, commit=False)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(order)

        log_order_event(order.id, "created", user_id=user_id, total=float(order.total), source="checkout")
        return await self.to_read(order)

    # ==================== POINT OF SALE ====================

    async def create_direct(self, principal: Principal, data: DirectOrderCreate) -> OrderRead:
        """
        Create an order entered by staff, optionally seated at a table.

        Raises:
            NotFoundError: Unknown product, table or customer
            BusinessRuleError: Inactive table, bad payment method or insufficient stock
        """
        await self._require_payment_method(data.payment_method_id)

        table = None
        if data.table_id is not None:
            table = await self.repos.tables.get_by_id(data.table_id)
            if table is None:
                raise NotFoundError("Table", data.table_id)
            if not table.is_active:
                raise BusinessRuleError("Table is not active", code="TABLE_INACTIVE")

        if data.user_id is not None and await self.repos.users.get_by_id(data.user_id) is None:
            raise NotFoundError("User", data.user_id)

        products = await self.repos.products.get_many([item.product_id for item in data.items])
        requested: Dict[int, int] = defaultdict(int)
        for item in data.items:
            if item.product_id not in products:
                raise NotFoundError("Product", item.product_id)
            requested[item.product_id] += item.quantity
        for product_id, quantity in requested.items():
            self._check_stock(products[product_id], quantity)

        pending = await self._require_status(OrderStatusName.PENDING)
        order = Order(
            user_id=data.user_id,
            seller_id=principal.id if principal.kind == PrincipalKind.SELLER else None,
            table_id=data.table_id,
            payment_method_id=data.payment_method_id,
            order_status_id=pending.id,
            delivery_type=data.delivery_type.value,
            notes=data.notes,
        )
        lines = [
            (
                products[item.product_id],
                item.quantity,
                quantize_money(item.unit_price if item.unit_price is not None else products[item.product_id].price),
            )
            for item in data.items
        ]
        try:
            order = await self._place(order, lines, pending, "Order created at point of sale")
            if table is not None:
                table.status = TableStatus.OCCUPIED
                await self.repos.tables.update(table, commit=False)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(order)

        log_order_event(order.id, "created", seller_id=order.seller_id, table_id=order.table_id, source="direct")
        return await self.to_read(order)

    # ==================== STATUS CHANGES ====================

    async def change_status(self, order_id: int, data: OrderStatusChange) -> OrderRead:
        order = await self._require_order(order_id)
        status = await self.repos.order_statuses.get_by_id(data.order_status_id)
        if status is None:
            raise NotFoundError("Order status", data.order_status_id)

        order.order_status_id = status.id
        await self.repos.orders.update(order, commit=False)
        await self.repos.orders.add_history(order.id, status.id, data.comment or f"Status changed to {status.name}")
        await self.session.commit()
        await self.session.refresh(order)

        log_order_event(order.id, "status_changed", status=status.name)
        return await self.to_read(order)

    async def cancel(self, order_id: int, principal: Principal, data: OrderCancel) -> OrderRead:
        """
        Cancel an open order and put its stock back.

        Raises:
            PermissionDeniedError: Caller is neither the owner nor an admin
            BusinessRuleError: The order is already delivered or cancelled
        """
        order = await self._require_order(order_id)
        if not (self._is_owner(order, principal) or principal.is_admin):
            raise PermissionDeniedError("Only the owner or an admin may cancel this order")
        if order.order_status_id in await self.repos.order_statuses.final_status_ids():
            raise BusinessRuleError("Order is already closed", code="ORDER_CLOSED")

        cancelled = await self._require_status(OrderStatusName.CANCELLED)
        items = await self.repos.orders.list_items(order.id)
        products = await self.repos.products.get_many([item.product_id for item in items])
        for item in items:
            product = products.get(item.product_id)
            if product is not None:
                product.stock += item.quantity
                await self.repos.products.update(product, commit=False)

        order.order_status_id = cancelled.id
        await self.repos.orders.update(order, commit=False)
        await self.repos.orders.add_history(order.id, cancelled.id, data.reason or "Order cancelled")
        await self.session.commit()
        await self.session.refresh(order)

        log_order_event(order.id, "cancelled", by=principal.kind.value)
        return await self.to_read(order)
