"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import aiosqlite
import pytest

from fieldstock.core.entities.reference import ReferenceSnapshot
from fieldstock.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteReferenceStore,
    SQLiteTransactionStore,
    initialize_database,
)
from tests.support import (
    AREAS,
    CONFIG,
    CREWS,
    ITEM_TYPES,
    LOCATIONS,
    STATUSES,
    FakeEdgeClient,
    build_snapshot,
)


@pytest.fixture
def reference_snapshot() -> ReferenceSnapshot:
    """In-memory reference snapshot."""
    return build_snapshot()


@pytest.fixture
def disabled_edge() -> FakeEdgeClient:
    """Edge client that is switched off."""
    return FakeEdgeClient(enabled=False)


@pytest.fixture
async def seeded_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Temporary database with schema and reference data."""
    db_path = tmp_path / "fieldstock_test.db"
    await initialize_database(db_path)

    async with aiosqlite.connect(db_path) as conn:
        await conn.executemany(
            "INSERT INTO item_types (id, name, inventory_type_id) VALUES (?, ?, ?)", ITEM_TYPES
        )
        await conn.executemany("INSERT INTO statuses (id, name) VALUES (?, ?)", STATUSES)
        await conn.executemany("INSERT INTO locations (id, name) VALUES (?, ?)", LOCATIONS)
        await conn.executemany("INSERT INTO crews (id, name) VALUES (?, ?)", CREWS)
        await conn.executemany("INSERT INTO areas (id, name) VALUES (?, ?)", AREAS)
        await conn.executemany("INSERT INTO config (key, value) VALUES (?, ?)", CONFIG)
        await conn.commit()

    yield db_path


@pytest.fixture
async def sqlite_db(seeded_db: Path) -> AsyncGenerator[Path, None]:
    """Point the global connection pool at the seeded database."""
    import fieldstock.infrastructure.storage.sqlite.connection as conn_module

    conn_module._pool = None
    mock_settings = MagicMock()
    mock_settings.storage.db_path = seeded_db
    mock_settings.storage.pool_size = 2
    mock_settings.storage.busy_timeout = 5000

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield seeded_db
        finally:
            from fieldstock.infrastructure.storage.sqlite.connection import close_pool

            await close_pool()


@pytest.fixture
def inventory_store(sqlite_db: Path) -> SQLiteInventoryStore:
    return SQLiteInventoryStore()


@pytest.fixture
def transaction_store(sqlite_db: Path) -> SQLiteTransactionStore:
    return SQLiteTransactionStore()


@pytest.fixture
async def db_snapshot(sqlite_db: Path) -> ReferenceSnapshot:
    """Snapshot loaded from the seeded database."""
    return await SQLiteReferenceStore().load_snapshot()


@pytest.fixture
def make_use_case(inventory_store, transaction_store):
    """Build an operation use case over the seeded database."""

    def _make(use_case_cls, edge_client=None, strategies=None):
        return use_case_cls(
            inventory_store=inventory_store,
            transaction_store=transaction_store,
            edge_client=edge_client or FakeEdgeClient(enabled=False),
            strategies=strategies,
            user_name="tester",
        )

    return _make
