"""Tests for IssueInventoryUseCase."""

import pytest

from fieldstock.application.dto.requests import IssueInventoryRequest, IssueItem
from fieldstock.application.use_cases import IssueInventoryUseCase
from fieldstock.application.use_cases.base import OperationContext
from fieldstock.application.use_cases.issue_inventory import SERIALIZED_FUNCTION
from fieldstock.core.entities.reference import NamedReference
from fieldstock.core.exceptions import RequiredReferenceMissingError, ValidationError
from tests.support import (
    AVAILABLE,
    DUCT,
    ISSUED,
    LOCATIONS,
    SERIAL_TYPE,
    WAREHOUSE,
    WITH_CREW,
    add_record,
    build_snapshot,
    sloc_state,
    sloc_total,
)


@pytest.fixture
def use_case(make_use_case):
    return make_use_case(IssueInventoryUseCase)


def _issue(*items: IssueItem, **overrides) -> IssueInventoryRequest:
    values = {"crew_id": 2, "area_id": 3, "items": list(items)}
    values.update(overrides)
    return IssueInventoryRequest(**values)


class TestIssueInventoryUseCase:
    async def test_partial_issue_splits(self, use_case, inventory_store, transaction_store, db_snapshot):
        """Issuing 10 of 15 leaves 5 Available and puts 10 with the crew."""
        source = await add_record(inventory_store, quantity=15)

        result = await use_case.execute(_issue(IssueItem(inventory_id=source.id, quantity=10)), db_snapshot)

        assert result.items[0].operation == "split"
        assert await sloc_state(inventory_store, 1) == [
            (WAREHOUSE, 0, 0, DUCT, AVAILABLE, "", "", 5),
            (WITH_CREW, 2, 3, DUCT, ISSUED, "", "", 10),
        ]
        [transaction] = await transaction_store.list_transactions()
        assert transaction.action == "Issue to Crew"
        assert transaction.notes == "Partial issue (10 of 15) to Crew 2 - Area 3"
        assert transaction.from_location_name == "Warehouse"
        assert transaction.old_status_name == "Available"
        assert transaction.assigned_crew_name == "Crew 2"

    async def test_partial_issue_merges_into_crew_group(self, use_case, inventory_store, db_snapshot):
        source = await add_record(inventory_store, quantity=15)
        crew_stock = await add_record(
            inventory_store, quantity=4, location_id=WITH_CREW, status_id=ISSUED, assigned_crew_id=2, area_id=3
        )

        result = await use_case.execute(_issue(IssueItem(inventory_id=source.id, quantity=10)), db_snapshot)

        assert result.items[0].inventory_id == crew_stock.id
        crew_record = await inventory_store.get_record(crew_stock.id)
        assert crew_record.quantity == 14
        assert await sloc_total(inventory_store, 1) == 19

    async def test_full_issue_moves_record(self, use_case, inventory_store, transaction_store, db_snapshot):
        source = await add_record(inventory_store, quantity=8)

        result = await use_case.execute(_issue(IssueItem(inventory_id=source.id)), db_snapshot)

        assert result.items[0].inventory_id == source.id
        assert result.items[0].operation == "updated"
        moved = await inventory_store.get_record(source.id)
        assert (moved.location_id, moved.status_id, moved.assigned_crew_id, moved.quantity) == (
            WITH_CREW,
            ISSUED,
            2,
            8,
        )
        [transaction] = await transaction_store.list_transactions()
        assert transaction.notes == "Issued to Crew 2 - Area 3"

    async def test_serialized_issued_in_place(self, use_case, inventory_store, db_snapshot):
        reel = await add_record(inventory_store, item_type_id=SERIAL_TYPE, quantity=1, mfgrsn="MFG-7")

        result = await use_case.execute(_issue(IssueItem(inventory_id=reel.id)), db_snapshot)

        assert result.succeeded == 1
        issued = await inventory_store.get_record(reel.id)
        assert (issued.location_id, issued.assigned_crew_id, issued.mfgrsn) == (WITH_CREW, 2, "MFG-7")

    async def test_issue_by_item_type_draws_from_receiving_group(self, use_case, inventory_store, db_snapshot):
        await add_record(inventory_store, quantity=20)

        result = await use_case.execute(
            _issue(IssueItem(item_type_id=DUCT, quantity=5), sloc_id=1), db_snapshot
        )

        item = result.items[0]
        assert item.details["source_quantity"] == 15
        assert await sloc_state(inventory_store, 1) == [
            (WAREHOUSE, 0, 0, DUCT, AVAILABLE, "", "", 15),
            (WITH_CREW, 2, 3, DUCT, ISSUED, "", "", 5),
        ]

    async def test_issue_by_item_type_requires_sloc(self, use_case, db_snapshot):
        with pytest.raises(ValidationError):
            await use_case.execute(_issue(IssueItem(item_type_id=DUCT, quantity=5)), db_snapshot)

    async def test_issue_by_item_type_from_empty_group_fails(self, use_case, inventory_store, db_snapshot):
        result = await use_case.execute(
            _issue(IssueItem(item_type_id=DUCT, quantity=5), sloc_id=1), db_snapshot
        )

        assert result.items[0].error_code == "RECORD_NOT_FOUND"
        assert await inventory_store.list_by_sloc(1) == []

    async def test_over_issue_fails_without_changes(self, use_case, inventory_store, transaction_store, db_snapshot):
        source = await add_record(inventory_store, quantity=15)

        result = await use_case.execute(_issue(IssueItem(inventory_id=source.id, quantity=20)), db_snapshot)

        assert result.items[0].success is False
        assert result.items[0].error_code == "INSUFFICIENT_QUANTITY"
        assert (await inventory_store.get_record(source.id)).quantity == 15
        assert await transaction_store.list_transactions() == []

    async def test_missing_record_fails_only_that_item(self, use_case, inventory_store, db_snapshot):
        source = await add_record(inventory_store, quantity=3)

        result = await use_case.execute(
            _issue(IssueItem(inventory_id=999), IssueItem(inventory_id=source.id)), db_snapshot
        )

        assert result.summary == "1 succeeded, 1 failed"
        assert result.items[0].error_code == "RECORD_NOT_FOUND"
        assert result.items[0].inventory_id == 999

    async def test_missing_with_crew_location_aborts(self, use_case, inventory_store, transaction_store):
        locations = {id_: NamedReference(id=id_, name=name) for id_, name in LOCATIONS if name != "With Crew"}
        source = await add_record(inventory_store, quantity=15)

        with pytest.raises(RequiredReferenceMissingError):
            await use_case.execute(
                _issue(IssueItem(inventory_id=source.id, quantity=5)), build_snapshot(locations=locations)
            )

        assert (await inventory_store.get_record(source.id)).quantity == 15
        assert await transaction_store.list_transactions() == []


class TestIssueRemoteShape:
    async def test_serialized_batch_uses_serialized_function(self, use_case, inventory_store, db_snapshot):
        reel = await add_record(inventory_store, item_type_id=SERIAL_TYPE, quantity=1, tilsonsn="T-9")
        request = _issue(IssueItem(inventory_id=reel.id))
        ctx = OperationContext(refs=db_snapshot)
        await use_case.prepare(request, ctx)

        assert use_case.function_for(request, ctx) == SERIALIZED_FUNCTION
        payload = use_case.remote_payload(request, ctx)
        assert payload["inventory_ids"] == [reel.id]
        assert payload["location_id"] == WITH_CREW

    async def test_mixed_batch_uses_bulk_function(self, use_case, inventory_store, db_snapshot):
        reel = await add_record(inventory_store, item_type_id=SERIAL_TYPE, quantity=1, tilsonsn="T-9")
        duct = await add_record(inventory_store, quantity=5)
        request = _issue(IssueItem(inventory_id=reel.id), IssueItem(inventory_id=duct.id, quantity=2))
        ctx = OperationContext(refs=db_snapshot)
        await use_case.prepare(request, ctx)

        assert use_case.function_for(request, ctx) == "bulk-issue-inventory"
        payload = use_case.remote_payload(request, ctx)
        assert payload["target_status_id"] == ISSUED
        assert len(payload["items"]) == 2
