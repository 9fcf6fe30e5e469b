"""Fixtures for API tests.

Every test gets its own in-memory SQLite database with the schema created
and the reference rows (roles, order statuses, payment methods) seeded. The
FastAPI ``get_session`` dependency is overridden to hand out the test
session, so rows created by fixtures are visible to the endpoints.
"""

from __future__ import annotations

from decimal import Decimal
from typing import AsyncGenerator, Awaitable, Callable, Optional
from unittest.mock import patch

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from cafeteria_api.core.constants import PrincipalKind, RoleName
from cafeteria_api.core.database.entities.categories import Category
from cafeteria_api.core.database.entities.dining_tables import DiningTable
from cafeteria_api.core.database.entities.products import Product
from cafeteria_api.core.database.entities.sellers import Seller
from cafeteria_api.core.database.entities.users import User
from cafeteria_api.core.database.seed import seed_reference_data
from cafeteria_api.core.database.utils import create_all, create_sessionmaker
from cafeteria_api.core.security import create_access_token, hash_password
from test.settings import test_settings
from test.unit_test.server.support import Account


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        test_settings.database.url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    async with create_sessionmaker(engine)() as session:
        await seed_reference_data(session)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from cafeteria_api.core.database import get_session
    from cafeteria_api.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("cafeteria_api.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()


# =====================================================================
# Accounts
# =====================================================================

MakeUser = Callable[..., Awaitable[Account]]


@pytest_asyncio.fixture
async def make_user(session: AsyncSession) -> MakeUser:
    """Factory persisting a user and issuing a token for it."""
    counter = {"n": 0}

    async def _make(
        email: Optional[str] = None,
        role: str = RoleName.CUSTOMER.value,
        is_active: bool = True,
        first_name: str = "Ana",
        last_name: str = "Rojas",
    ) -> Account:
        counter["n"] += 1
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email or f"user{counter['n']}@cafeteria.cl",
            password_hash=hash_password(test_settings.accounts.password),
            role=role,
            is_active=is_active,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return Account(user, create_access_token(user.id, PrincipalKind.USER, user.role))

    return _make


@pytest_asyncio.fixture
async def admin(make_user: MakeUser) -> Account:
    return await make_user(
        email=test_settings.accounts.admin_email, role=RoleName.ADMIN.value, first_name="Admin", last_name="Casino"
    )


@pytest_asyncio.fixture
async def customer(make_user: MakeUser) -> Account:
    return await make_user(email=test_settings.accounts.customer_email)


@pytest_asyncio.fixture
async def other_customer(make_user: MakeUser) -> Account:
    return await make_user(email="luis@cafeteria.cl", first_name="Luis", last_name="Soto")


@pytest_asyncio.fixture
async def seller(session: AsyncSession) -> Account:
    entity = Seller(
        first_name="Pedro",
        last_name="Munoz",
        email=test_settings.accounts.seller_email,
        password_hash=hash_password(test_settings.accounts.password),
    )
    session.add(entity)
    await session.commit()
    await session.refresh(entity)
    return Account(entity, create_access_token(entity.id, PrincipalKind.SELLER, RoleName.SELLER.value))


# =====================================================================
# Catalog and tables
# =====================================================================


@pytest_asyncio.fixture
async def category(session: AsyncSession) -> Category:
    entity = Category(name="Bebidas calientes", description="Cafe y te")
    session.add(entity)
    await session.commit()
    await session.refresh(entity)
    return entity


@pytest_asyncio.fixture
async def make_product(session: AsyncSession, category: Category) -> Callable[..., Awaitable[Product]]:
    async def _make(
        name: str = "Latte",
        price: str = "2500.00",
        stock: int = 20,
        is_available: bool = True,
        seller_id: Optional[int] = None,
    ) -> Product:
        product = Product(
            category_id=category.id,
            name=name,
            price=Decimal(price),
            stock=stock,
            is_available=is_available,
            seller_id=seller_id,
        )
        session.add(product)
        await session.commit()
        await session.refresh(product)
        return product

    return _make


@pytest_asyncio.fixture
async def product(make_product) -> Product:
    return await make_product()


@pytest_asyncio.fixture
async def table(session: AsyncSession) -> DiningTable:
    entity = DiningTable(number="M1", capacity=4, location="Terraza")
    session.add(entity)
    await session.commit()
    await session.refresh(entity)
    return entity


@pytest_asyncio.fixture
async def foreign_keys(session: AsyncSession) -> None:
    """Make SQLite enforce foreign keys on the shared test connection."""
    await session.execute(text("PRAGMA foreign_keys=ON"))
    await session.commit()
