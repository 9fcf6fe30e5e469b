"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.server.core.config import settings

from .seed import seed_reference_data
from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)

# Create global engine and session factory
engine = create_engine(settings.effective_database_url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the database.

    In production the Alembic migration creates the schema and seeds the
    reference rows, so this is a no-op unless AUTO_CREATE_TABLES is set.
    """
    if not settings.auto_create_tables:
        logger.info("AUTO_CREATE_TABLES is off; relying on Alembic migrations")
        return

    await create_all(engine)
    async with async_session_maker() as session:
        await seed_reference_data(session)
    logger.info("Tables created and reference data seeded")
