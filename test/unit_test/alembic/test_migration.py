"""Tests for the initial Alembic migration script.

The migration is applied to an in-memory SQLite database through Alembic's
``Operations`` API, so no alembic.ini or running PostgreSQL is needed. Tests
verify that the script:
1. Creates every table the ORM models map to
2. Seeds the reference rows with the ids the application relies on
3. Downgrades cleanly
"""

import importlib.util
from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlmodel import SQLModel

import cafeteria_api.core.database.entities  # noqa: F401  registers every table on SQLModel.metadata

PROJECT_ROOT = Path(__file__).resolve().parents[3]
MIGRATION_FILE = PROJECT_ROOT / "alembic" / "versions" / "20260101_000000_initial_schema_and_seed_data.py"


@pytest.fixture(scope="module")
def migration():
    spec = importlib.util.spec_from_file_location("initial_migration", MIGRATION_FILE)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def connection():
    engine = sa.create_engine("sqlite://")
    with engine.begin() as conn:
        yield conn
    engine.dispose()


def _run(connection, step) -> None:
    context = MigrationContext.configure(connection)
    with Operations.context(context):
        step()


class TestMigrationScript:
    def test_revision_is_root(self, migration):
        assert migration.revision == "20260101_000000"
        assert migration.down_revision is None

    def test_creates_every_mapped_table(self, migration, connection):
        _run(connection, migration.upgrade)

        created = set(sa.inspect(connection).get_table_names())
        assert set(SQLModel.metadata.tables) <= created

    def test_columns_match_models(self, migration, connection):
        _run(connection, migration.upgrade)
        inspector = sa.inspect(connection)

        for name, table in SQLModel.metadata.tables.items():
            migrated = {column["name"] for column in inspector.get_columns(name)}
            assert {column.name for column in table.columns} <= migrated, name

    def test_seeds_reference_rows_in_order(self, migration, connection):
        _run(connection, migration.upgrade)

        roles = connection.execute(sa.text("SELECT id, name FROM roles ORDER BY id")).all()
        statuses = connection.execute(sa.text("SELECT id, name FROM order_statuses ORDER BY id")).all()
        methods = connection.execute(sa.text("SELECT name, is_active FROM payment_methods ORDER BY id")).all()

        assert [tuple(r) for r in roles] == [(1, "admin"), (2, "customer"), (3, "seller")]
        assert [tuple(s) for s in statuses] == [
            (1, "pending"),
            (2, "processing"),
            (3, "shipped"),
            (4, "delivered"),
            (5, "cancelled"),
        ]
        assert [m[0] for m in methods] == ["cash", "credit_card", "debit_card", "transfer"]
        assert all(m[1] for m in methods)

    def test_downgrade_drops_everything(self, migration, connection):
        _run(connection, migration.upgrade)
        _run(connection, migration.downgrade)

        assert sa.inspect(connection).get_table_names() == []
