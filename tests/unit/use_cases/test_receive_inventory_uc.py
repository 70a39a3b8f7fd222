"""Tests for ReceiveInventoryUseCase."""

import pytest

from fieldstock.application.dto.requests import ReceiveInventoryRequest, ReceiveItem
from fieldstock.application.use_cases import ReceiveInventoryUseCase
from fieldstock.application.use_cases.base import OperationContext
from fieldstock.core.exceptions import RequiredReferenceMissingError
from tests.support import (
    AVAILABLE,
    DUCT,
    HANDHOLE,
    SERIAL_TYPE,
    WAREHOUSE,
    add_record,
    build_snapshot,
    sloc_state,
    sloc_total,
)


@pytest.fixture
def use_case(make_use_case):
    return make_use_case(ReceiveInventoryUseCase)


class TestReceiveInventoryUseCase:
    async def test_bulk_into_empty_group_creates(self, use_case, inventory_store, transaction_store, db_snapshot):
        request = ReceiveInventoryRequest(sloc_id=1, items=[ReceiveItem(item_type_id=DUCT, quantity=6)])

        result = await use_case.execute(request, db_snapshot)

        assert result.strategy == "local"
        assert result.summary == "1 succeeded, 0 failed"
        assert result.items[0].operation == "created"
        assert await sloc_state(inventory_store, 1) == [(WAREHOUSE, 0, 0, DUCT, AVAILABLE, "", "", 6)]

        [transaction] = await transaction_store.list_transactions()
        assert transaction.action == "Receive from Vendor"
        assert transaction.to_location_name == "Warehouse"
        assert transaction.status_name == "Available"
        assert transaction.notes == "Received: New record"
        assert transaction.user_name == "tester"

    async def test_bulk_merges_into_existing(self, use_case, inventory_store, transaction_store, db_snapshot):
        existing = await add_record(inventory_store, quantity=4)
        request = ReceiveInventoryRequest(sloc_id=1, items=[ReceiveItem(item_type_id=DUCT, quantity=6)])

        result = await use_case.execute(request, db_snapshot)

        item = result.items[0]
        assert (item.inventory_id, item.operation, item.quantity) == (existing.id, "updated", 10)
        assert await sloc_total(inventory_store, 1) == 10
        [transaction] = await transaction_store.list_transactions()
        assert transaction.notes == "Received: Updated existing"

    async def test_serialized_units_get_their_own_records(self, use_case, inventory_store, db_snapshot):
        request = ReceiveInventoryRequest(
            sloc_id=1,
            items=[
                ReceiveItem(item_type_id=SERIAL_TYPE, quantity=1, tilsonsn="TIL-1"),
                ReceiveItem(item_type_id=SERIAL_TYPE, quantity=1, tilsonsn="TIL-2"),
            ],
        )

        result = await use_case.execute(request, db_snapshot)

        assert result.succeeded == 2
        records = await inventory_store.list_by_sloc(1)
        assert sorted(r.tilsonsn for r in records) == ["TIL-1", "TIL-2"]
        assert result.consolidation.consolidated == 0

    async def test_bad_item_does_not_stop_batch(self, use_case, inventory_store, db_snapshot):
        request = ReceiveInventoryRequest(
            sloc_id=1,
            items=[
                ReceiveItem(item_type_id=SERIAL_TYPE, quantity=3, mfgrsn="MFG-1"),
                ReceiveItem(item_type_id=HANDHOLE, quantity=2),
            ],
        )

        result = await use_case.execute(request, db_snapshot)

        assert result.summary == "1 succeeded, 1 failed"
        assert result.items[0].error_code == "VALIDATION_ERROR"
        assert await sloc_total(inventory_store, 1) == 2

    async def test_consolidates_pre_existing_duplicates(self, use_case, inventory_store, db_snapshot):
        first = await add_record(inventory_store, quantity=5)
        await add_record(inventory_store, quantity=3)
        request = ReceiveInventoryRequest(sloc_id=1, items=[ReceiveItem(item_type_id=DUCT, quantity=2)])

        result = await use_case.execute(request, db_snapshot)

        assert (result.consolidation.consolidated, result.consolidation.deleted) == (1, 1)
        [record] = await inventory_store.list_by_sloc(1)
        assert (record.id, record.quantity) == (first.id, 10)

    async def test_missing_receiving_location_aborts_before_writes(self, use_case, inventory_store, transaction_store):
        refs = build_snapshot(config={"receivingStatus": "Available"})
        request = ReceiveInventoryRequest(sloc_id=1, items=[ReceiveItem(item_type_id=DUCT, quantity=2)])

        with pytest.raises(RequiredReferenceMissingError):
            await use_case.execute(request, refs)

        assert await inventory_store.list_by_sloc(1) == []
        assert await transaction_store.list_transactions() == []

    async def test_receiving_status_defaults_when_not_configured(self, use_case, inventory_store):
        refs = build_snapshot(config={"receivingLocation": "10"})
        request = ReceiveInventoryRequest(sloc_id=1, items=[ReceiveItem(item_type_id=DUCT, quantity=2)])

        await use_case.execute(request, refs)

        [record] = await inventory_store.list_by_sloc(1)
        assert record.status_id == AVAILABLE

    async def test_remote_payload(self, use_case, db_snapshot):
        request = ReceiveInventoryRequest(sloc_id=1, items=[ReceiveItem(item_type_id=DUCT, quantity=2)])
        ctx = OperationContext(refs=db_snapshot)
        use_case.resolve_references(request, ctx)

        payload = use_case.remote_payload(request, ctx)
        assert payload["location_id"] == WAREHOUSE
        assert payload["status_id"] == AVAILABLE
        assert payload["items"][0]["quantity"] == 2
