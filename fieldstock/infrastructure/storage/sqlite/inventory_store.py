"""SQLite implementation of inventory record storage."""

from datetime import datetime

import aiosqlite

from fieldstock.config import get_logger
from fieldstock.core.entities.inventory import BulkTarget, InventoryRecord
from fieldstock.core.interfaces.inventory_store import IInventoryStore
from fieldstock.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

# Empty-string serials count as absent, matching InventoryRecord.is_serialized
BULK_CLAUSE = "COALESCE(mfgrsn, '') = '' AND COALESCE(tilsonsn, '') = ''"


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of the ``inventory`` table."""

    async def get_record(self, record_id: int) -> InventoryRecord | None:
        """Get inventory record by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM inventory WHERE id = ?", (record_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    async def list_by_sloc(self, sloc_id: int) -> list[InventoryRecord]:
        """List every record in a SLOC, ordered by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory WHERE sloc_id = ? ORDER BY id",
                (sloc_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def list_bulk_by_sloc(self, sloc_id: int) -> list[InventoryRecord]:
        """List bulk records in a SLOC, ordered by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM inventory WHERE sloc_id = ? AND {BULK_CLAUSE} ORDER BY id",
                (sloc_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def find_bulk(self, target: BulkTarget) -> list[InventoryRecord]:
        """Find bulk records exactly matching the target group."""
        async with get_connection() as conn:
            # IS compares NULL crew/area as equal to NULL and unequal to any ID
            cursor = await conn.execute(
                f"""
                SELECT * FROM inventory
                WHERE sloc_id = ?
                  AND location_id = ?
                  AND item_type_id = ?
                  AND status_id = ?
                  AND assigned_crew_id IS ?
                  AND area_id IS ?
                  AND {BULK_CLAUSE}
                ORDER BY id
                """,
                (
                    target.sloc_id,
                    target.location_id,
                    target.item_type_id,
                    target.status_id,
                    target.assigned_crew_id,
                    target.area_id,
                ),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def create_record(self, record: InventoryRecord) -> InventoryRecord:
        """Insert a record and assign its ID."""
        now = datetime.utcnow()
        record.created_at = now
        record.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO inventory (
                    item_type_id, quantity, location_id, status_id, sloc_id,
                    assigned_crew_id, area_id, mfgrsn, tilsonsn,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.item_type_id,
                    record.quantity,
                    record.location_id,
                    record.status_id,
                    record.sloc_id,
                    record.assigned_crew_id,
                    record.area_id,
                    record.mfgrsn,
                    record.tilsonsn,
                    record.created_at.isoformat(),
                    record.updated_at.isoformat(),
                ),
            )
            record.id = cursor.lastrowid
            logger.info(
                "inventory_record_created",
                inventory_id=record.id,
                item_type_id=record.item_type_id,
                quantity=record.quantity,
            )
            return record

    async def update_record(self, record: InventoryRecord) -> InventoryRecord:
        """Update a record by ID."""
        record.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE inventory SET
                    item_type_id = ?,
                    quantity = ?,
                    location_id = ?,
                    status_id = ?,
                    sloc_id = ?,
                    assigned_crew_id = ?,
                    area_id = ?,
                    mfgrsn = ?,
                    tilsonsn = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    record.item_type_id,
                    record.quantity,
                    record.location_id,
                    record.status_id,
                    record.sloc_id,
                    record.assigned_crew_id,
                    record.area_id,
                    record.mfgrsn,
                    record.tilsonsn,
                    record.updated_at.isoformat(),
                    record.id,
                ),
            )
            logger.debug("inventory_record_updated", inventory_id=record.id)
            return record

    async def delete_record(self, record_id: int) -> None:
        """Delete a record by ID."""
        async with get_transaction() as conn:
            await conn.execute("DELETE FROM inventory WHERE id = ?", (record_id,))
            logger.info("inventory_record_deleted", inventory_id=record_id)

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> InventoryRecord:
        """Convert a database row to an InventoryRecord entity."""
        return InventoryRecord(
            id=row["id"],
            item_type_id=row["item_type_id"],
            quantity=int(row["quantity"]),
            location_id=row["location_id"],
            status_id=row["status_id"],
            sloc_id=row["sloc_id"],
            assigned_crew_id=row["assigned_crew_id"],
            area_id=row["area_id"],
            mfgrsn=row["mfgrsn"],
            tilsonsn=row["tilsonsn"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


def _parse_timestamp(value: str | None) -> datetime:
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return datetime.utcnow()
