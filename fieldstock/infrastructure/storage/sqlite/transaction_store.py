"""SQLite implementation of transaction history storage."""

from datetime import datetime

import aiosqlite

from fieldstock.config import get_logger
from fieldstock.core.entities.transaction import (
    SequentialRecord,
    TransactionRecord,
    TransactionType,
)
from fieldstock.core.interfaces.transaction_store import ITransactionStore
from fieldstock.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

TRANSACTION_COLUMNS = (
    "inventory_id",
    "transaction_type",
    "action",
    "item_type_name",
    "quantity",
    "old_quantity",
    "from_location_name",
    "to_location_name",
    "status_name",
    "old_status_name",
    "assigned_crew_name",
    "old_crew_name",
    "area_name",
    "old_area_name",
    "notes",
    "user_name",
    "date_time",
)


class SQLiteTransactionStore(ITransactionStore):
    """SQLite implementation of the ``transactions`` and ``sequentials`` tables."""

    async def add_transaction(self, transaction: TransactionRecord) -> TransactionRecord:
        """Append a transaction record."""
        values = transaction.model_dump(include=set(TRANSACTION_COLUMNS))
        values["transaction_type"] = transaction.transaction_type.value
        values["date_time"] = transaction.date_time.isoformat()

        placeholders = ", ".join("?" for _ in TRANSACTION_COLUMNS)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                f"INSERT INTO transactions ({', '.join(TRANSACTION_COLUMNS)}) "
                f"VALUES ({placeholders})",
                tuple(values[column] for column in TRANSACTION_COLUMNS),
            )
            transaction.id = cursor.lastrowid
            logger.info(
                "transaction_recorded",
                transaction_id=transaction.id,
                inventory_id=transaction.inventory_id,
                type=transaction.transaction_type.value,
                qty=transaction.quantity,
            )
            return transaction

    async def list_transactions(
        self,
        inventory_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[TransactionRecord]:
        """List transactions, newest first."""
        async with get_connection() as conn:
            if inventory_id is None:
                cursor = await conn.execute(
                    """
                    SELECT * FROM transactions
                    ORDER BY date_time DESC, id DESC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
            else:
                cursor = await conn.execute(
                    """
                    SELECT * FROM transactions
                    WHERE inventory_id = ?
                    ORDER BY date_time DESC, id DESC
                    LIMIT ? OFFSET ?
                    """,
                    (inventory_id, limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_transaction(row) for row in rows]

    async def add_sequential(self, sequential: SequentialRecord) -> SequentialRecord:
        """Append a sequential footage record."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO sequentials (inventory_id, sequential_number, notes, recorded_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    sequential.inventory_id,
                    sequential.sequential_number,
                    sequential.notes,
                    sequential.recorded_at.isoformat(),
                ),
            )
            sequential.id = cursor.lastrowid
            logger.info(
                "sequential_recorded",
                inventory_id=sequential.inventory_id,
                sequential_number=sequential.sequential_number,
            )
            return sequential

    @staticmethod
    def _row_to_transaction(row: aiosqlite.Row) -> TransactionRecord:
        """Convert a database row to a TransactionRecord entity."""
        date_time = datetime.utcnow()
        if row["date_time"]:
            try:
                date_time = datetime.fromisoformat(row["date_time"])
            except (ValueError, TypeError):
                pass

        data = {column: row[column] for column in TRANSACTION_COLUMNS}
        data["transaction_type"] = TransactionType(row["transaction_type"])
        data["item_type_name"] = row["item_type_name"] or "Unknown"
        data["date_time"] = date_time
        return TransactionRecord(id=row["id"], **data)
