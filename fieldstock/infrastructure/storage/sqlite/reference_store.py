"""SQLite implementation of reference data lookup."""

from fieldstock.config import get_logger
from fieldstock.core.entities.reference import ItemType, NamedReference, ReferenceSnapshot
from fieldstock.core.interfaces.reference_store import IReferenceStore
from fieldstock.infrastructure.storage.sqlite.connection import get_connection

logger = get_logger(__name__)

NAMED_TABLES = ("statuses", "locations", "crews", "areas")


class SQLiteReferenceStore(IReferenceStore):
    """Loads reference tables and the key/value config table."""

    async def load_snapshot(self) -> ReferenceSnapshot:
        """Load all reference tables and configuration into a snapshot."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT id, name, inventory_type_id FROM item_types")
            item_types = {
                row["id"]: ItemType(
                    id=row["id"],
                    name=row["name"],
                    inventory_type_id=row["inventory_type_id"],
                )
                for row in await cursor.fetchall()
            }

            named: dict[str, dict[int, NamedReference]] = {}
            for table in NAMED_TABLES:
                cursor = await conn.execute(f"SELECT id, name FROM {table}")
                named[table] = {
                    row["id"]: NamedReference(id=row["id"], name=row["name"])
                    for row in await cursor.fetchall()
                }

            cursor = await conn.execute("SELECT key, value FROM config")
            config = {
                row["key"]: str(row["value"])
                for row in await cursor.fetchall()
                if row["value"] is not None
            }

        logger.debug(
            "reference_snapshot_loaded",
            item_types=len(item_types),
            statuses=len(named["statuses"]),
            locations=len(named["locations"]),
        )
        return ReferenceSnapshot(item_types=item_types, config=config, **named)
