"""Unit tests for reference data seeding."""

import pytest
from sqlmodel import select

from cafeteria_api.core.database.entities.order_statuses import OrderStatus
from cafeteria_api.core.database.entities.payment_methods import PaymentMethod
from cafeteria_api.core.database.entities.roles import Role
from cafeteria_api.core.database.seed import seed_reference_data

pytestmark = pytest.mark.asyncio


async def test_seeded_ids(in_memory_session):
    roles = (await in_memory_session.execute(select(Role).order_by(Role.id))).scalars().all()
    statuses = (await in_memory_session.execute(select(OrderStatus).order_by(OrderStatus.id))).scalars().all()
    methods = (await in_memory_session.execute(select(PaymentMethod).order_by(PaymentMethod.id))).scalars().all()

    assert [(r.id, r.name) for r in roles] == [(1, "admin"), (2, "customer"), (3, "seller")]
    assert [s.name for s in statuses] == ["pending", "processing", "shipped", "delivered", "cancelled"]
    assert [s.id for s in statuses] == [1, 2, 3, 4, 5]
    assert [(m.id, m.name) for m in methods] == [(1, "cash"), (2, "credit_card"), (3, "debit_card"), (4, "transfer")]


async def test_seeding_twice_inserts_nothing(in_memory_session):
    assert await seed_reference_data(in_memory_session) == 0


async def test_only_missing_rows_are_added(in_memory_session):
    method = (await in_memory_session.execute(select(PaymentMethod).where(PaymentMethod.name == "transfer"))).scalar_one()
    await in_memory_session.delete(method)
    await in_memory_session.commit()

    assert await seed_reference_data(in_memory_session) == 1
