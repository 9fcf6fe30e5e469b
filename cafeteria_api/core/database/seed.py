"""
Reference data seeding.

Inserts the roles, order statuses and payment methods the application relies
on. Rows that already exist (matched by name) are left untouched, so the
function is safe to run on every startup.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from cafeteria_api.core.constants import SEED_ORDER_STATUSES, SEED_PAYMENT_METHODS, SEED_ROLES

from .entities.order_statuses import OrderStatus
from .entities.payment_methods import PaymentMethod
from .entities.roles import Role


async def _existing_names(session: AsyncSession, model) -> set[str]:
    result = await session.execute(select(model.name))
    return set(result.scalars().all())


async def seed_reference_data(session: AsyncSession) -> int:
    """Insert missing reference rows.

    Order statuses are inserted in declaration order, so on an empty table
    they receive ids 1..5 (pending .. cancelled).

    Args:
        session: Async session to write with

    Returns:
        Number of rows inserted
    """
    inserted = 0

    role_names = await _existing_names(session, Role)
    for name, description in SEED_ROLES:
        if name.value not in role_names:
            session.add(Role(name=name.value, description=description))
            inserted += 1

    status_names = await _existing_names(session, OrderStatus)
    for name, description in SEED_ORDER_STATUSES:
        if name.value not in status_names:
            session.add(OrderStatus(name=name.value, description=description))
            inserted += 1

    method_names = await _existing_names(session, PaymentMethod)
    for name, description in SEED_PAYMENT_METHODS:
        if name not in method_names:
            session.add(PaymentMethod(name=name, description=description))
            inserted += 1

    await session.commit()
    return inserted
