"""
Database schema bootstrap.

Creates the inventory, history and reference tables when they are missing.
"""

from pathlib import Path

import aiosqlite

from fieldstock.config import get_logger, get_settings

logger = get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS item_types (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    inventory_type_id INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS statuses (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS locations (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS crews (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS areas (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS config (
    key TEXT PRIMARY KEY,
    value TEXT
);

CREATE TABLE IF NOT EXISTS inventory (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    item_type_id INTEGER NOT NULL,
    quantity INTEGER NOT NULL DEFAULT 1 CHECK(quantity >= 0),
    location_id INTEGER NOT NULL,
    status_id INTEGER NOT NULL,
    sloc_id INTEGER NOT NULL,
    assigned_crew_id INTEGER,
    area_id INTEGER,
    mfgrsn TEXT,
    tilsonsn TEXT,
    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_inventory_sloc ON inventory(sloc_id);
CREATE INDEX IF NOT EXISTS idx_inventory_group
    ON inventory(sloc_id, item_type_id, location_id, status_id);

CREATE TABLE IF NOT EXISTS transactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    inventory_id INTEGER,
    transaction_type TEXT NOT NULL,
    action TEXT NOT NULL,
    item_type_name TEXT,
    quantity INTEGER NOT NULL DEFAULT 0,
    old_quantity INTEGER,
    from_location_name TEXT,
    to_location_name TEXT,
    status_name TEXT,
    old_status_name TEXT,
    assigned_crew_name TEXT,
    old_crew_name TEXT,
    area_name TEXT,
    old_area_name TEXT,
    notes TEXT,
    user_name TEXT,
    date_time TIMESTAMP NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_transactions_inventory ON transactions(inventory_id);
CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date_time);

CREATE TABLE IF NOT EXISTS sequentials (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    inventory_id INTEGER NOT NULL,
    sequential_number INTEGER NOT NULL,
    notes TEXT,
    recorded_at TIMESTAMP NOT NULL
);
"""


TABLES = (
    "item_types",
    "statuses",
    "locations",
    "crews",
    "areas",
    "config",
    "inventory",
    "transactions",
    "sequentials",
)


async def initialize_database(db_path: Path | None = None) -> None:
    """
    Create any missing tables.

    Args:
        db_path: Path to database file (default from settings)
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info("initializing_database", db_path=str(db_path))

    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.executescript(SCHEMA_SQL)
        await conn.commit()

        cursor = await conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        )
        tables = [row[0] for row in await cursor.fetchall()]
        logger.info("database_tables", count=len(tables))
