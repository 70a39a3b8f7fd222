"""Tests for TransactionLogger."""

from unittest.mock import AsyncMock

from fieldstock.core.entities.transaction import SequentialRecord, TransactionRecord, TransactionType
from fieldstock.core.services.transaction_logger import LOG_TRANSACTION_FUNCTION, TransactionLogger
from tests.support import FakeEdgeClient


def _transaction() -> TransactionRecord:
    return TransactionRecord(
        inventory_id=3,
        transaction_type=TransactionType.RETURN,
        action="Return Material",
        quantity=4,
    )


class TestTransactionLogger:
    async def test_direct_insert_when_edge_disabled(self):
        store = AsyncMock()
        store.add_transaction.side_effect = lambda tx: tx
        edge = FakeEdgeClient(enabled=False)

        logged = await TransactionLogger(store, edge, user_name="jdoe").log(_transaction())

        assert logged is not None
        assert logged.user_name == "jdoe"
        assert edge.calls == []
        store.add_transaction.assert_awaited_once()

    async def test_edge_used_when_enabled(self):
        store = AsyncMock()
        edge = FakeEdgeClient(data={"id": 1})

        await TransactionLogger(store, edge).log(_transaction())

        function, payload = edge.calls[0]
        assert function == LOG_TRANSACTION_FUNCTION
        assert payload["transaction"]["transaction_type"] == "Return"
        store.add_transaction.assert_not_called()

    async def test_falls_back_to_store_when_edge_fails(self):
        store = AsyncMock()
        store.add_transaction.side_effect = lambda tx: tx
        edge = FakeEdgeClient(fail=True)

        logged = await TransactionLogger(store, edge).log(_transaction())

        assert logged is not None
        store.add_transaction.assert_awaited_once()

    async def test_store_failure_is_swallowed(self):
        store = AsyncMock()
        store.add_transaction.side_effect = RuntimeError("table missing")

        assert await TransactionLogger(store).log(_transaction()) is None

    async def test_sequential_failure_is_swallowed(self):
        store = AsyncMock()
        store.add_sequential.side_effect = RuntimeError("table missing")

        result = await TransactionLogger(store).log_sequential(
            SequentialRecord(inventory_id=1, sequential_number=1200)
        )
        assert result is None
