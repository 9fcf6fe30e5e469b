"""Test configuration for database unit tests.

This module provides an in-memory SQLite engine with every table created and
the reference data seeded, plus small factories for rows the repository tests
need.
"""

from __future__ import annotations

from decimal import Decimal
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from cafeteria_api.core.database.entities.categories import Category
from cafeteria_api.core.database.entities.products import Product
from cafeteria_api.core.database.entities.users import User
from cafeteria_api.core.database.seed import seed_reference_data
from cafeteria_api.core.database.utils import create_all, create_sessionmaker


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session on the in-memory database with reference data seeded."""
    async with create_sessionmaker(in_memory_engine)() as session:
        await seed_reference_data(session)
        yield session


@pytest.fixture
def make_db_user(in_memory_session: AsyncSession):
    counter = {"n": 0}

    async def _make(**overrides) -> User:
        counter["n"] += 1
        data = {
            "first_name": "Usuario",
            "last_name": "Prueba",
            "email": f"user{counter['n']}@cafeteria.cl",
            "password_hash": "not-a-real-hash",
        }
        data.update(overrides)
        user = User(**data)
        in_memory_session.add(user)
        await in_memory_session.commit()
        return user

    return _make


@pytest.fixture
async def db_category(in_memory_session: AsyncSession) -> Category:
    category = Category(name="Pasteleria")
    in_memory_session.add(category)
    await in_memory_session.commit()
    return category


@pytest.fixture
def make_db_product(in_memory_session: AsyncSession, db_category: Category):
    async def _make(**overrides) -> Product:
        data = {"name": "Croissant", "price": Decimal("1800.00"), "stock": 10, "category_id": db_category.id}
        data.update(overrides)
        product = Product(**data)
        in_memory_session.add(product)
        await in_memory_session.commit()
        return product

    return _make
