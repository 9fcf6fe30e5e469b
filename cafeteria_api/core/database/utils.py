"""
Engine and session factories for the cafeteria database.

``create_engine`` accepts Heroku-style ``postgres://`` URLs and SQLite URLs
alike. ``create_all`` builds the schema straight from the entity metadata
and backs the in-memory databases of the test suite and the
``AUTO_CREATE_TABLES`` startup flag; deployed databases are migrated with
Alembic.
"""

from __future__ import annotations

import re

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .base import Base


def normalize_database_url(db_url: str) -> str:
    """Rewrite ``postgres://``-style URLs to use the asyncpg driver."""
    return re.sub(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://", "postgresql+asyncpg://", db_url, count=1)


def create_engine(db_url: str) -> AsyncEngine:
    """Engine for ``db_url`` with connection liveness checks enabled."""
    return create_async_engine(normalize_database_url(db_url), pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory whose objects stay readable after ``commit()``.

    Services return entities to the routers after committing, so attributes
    must not expire.
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create every cafeteria table that does not exist yet."""
    # entities must be imported so their tables land in Base.metadata
    from . import entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
