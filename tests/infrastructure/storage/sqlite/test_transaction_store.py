"""Tests for SQLite transaction and sequential storage."""

from datetime import datetime, timedelta

import aiosqlite

from fieldstock.core.entities.transaction import SequentialRecord, TransactionRecord, TransactionType


def _transaction(inventory_id: int, action: str, date_time: datetime) -> TransactionRecord:
    return TransactionRecord(
        inventory_id=inventory_id,
        transaction_type=TransactionType.ISSUE,
        action=action,
        item_type_name="Duct 1.25in",
        quantity=10,
        from_location_name="Warehouse",
        to_location_name="With Crew",
        assigned_crew_name="Crew 2",
        date_time=date_time,
    )


class TestSQLiteTransactionStore:
    async def test_add_assigns_id(self, transaction_store):
        logged = await transaction_store.add_transaction(
            _transaction(1, "Issue to Crew", datetime(2024, 3, 1, 9, 0))
        )
        assert logged.id is not None

    async def test_round_trip_keeps_denormalized_names(self, transaction_store):
        await transaction_store.add_transaction(_transaction(1, "Issue to Crew", datetime(2024, 3, 1)))

        [loaded] = await transaction_store.list_transactions(inventory_id=1)
        assert loaded.transaction_type is TransactionType.ISSUE
        assert loaded.from_location_name == "Warehouse"
        assert loaded.assigned_crew_name == "Crew 2"
        assert loaded.old_quantity is None

    async def test_newest_first_with_filter_and_paging(self, transaction_store):
        start = datetime(2024, 3, 1)
        for offset in range(3):
            await transaction_store.add_transaction(
                _transaction(1, f"step {offset}", start + timedelta(hours=offset))
            )
        await transaction_store.add_transaction(_transaction(2, "other", start))

        actions = [t.action for t in await transaction_store.list_transactions(inventory_id=1)]
        assert actions == ["step 2", "step 1", "step 0"]

        page = await transaction_store.list_transactions(inventory_id=1, limit=1, offset=1)
        assert [t.action for t in page] == ["step 1"]

        assert len(await transaction_store.list_transactions()) == 4

    async def test_add_sequential(self, transaction_store, sqlite_db):
        stored = await transaction_store.add_sequential(
            SequentialRecord(inventory_id=5, sequential_number=10450, notes="estimated")
        )
        assert stored.id is not None

        async with aiosqlite.connect(sqlite_db) as conn:
            cursor = await conn.execute("SELECT inventory_id, sequential_number, notes FROM sequentials")
            rows = await cursor.fetchall()
        assert rows == [(5, 10450, "estimated")]
