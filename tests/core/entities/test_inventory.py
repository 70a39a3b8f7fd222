"""Tests for inventory, transaction and reference entities."""

import pytest
from pydantic import ValidationError

from fieldstock.core.entities.inventory import BulkTarget, InventoryRecord
from fieldstock.core.entities.transaction import TransactionRecord, TransactionType
from tests.support import build_snapshot


class TestInventoryRecord:
    def test_defaults(self):
        record = InventoryRecord(item_type_id=7, location_id=10, status_id=1, sloc_id=1)
        assert record.id is None
        assert record.quantity == 1
        assert record.assigned_crew_id is None
        assert record.is_bulk is True
        assert record.created_at is not None

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            InventoryRecord(item_type_id=7, location_id=10, status_id=1, sloc_id=1, quantity=-1)

    @pytest.mark.parametrize(
        "mfgrsn,tilsonsn,serialized",
        [
            ("MFG-1", None, True),
            (None, "TIL-1", True),
            ("", "", False),
            (None, None, False),
        ],
    )
    def test_serials_mark_record_serialized(self, mfgrsn, tilsonsn, serialized):
        record = InventoryRecord(
            item_type_id=1, location_id=10, status_id=1, sloc_id=1, mfgrsn=mfgrsn, tilsonsn=tilsonsn
        )
        assert record.is_serialized is serialized
        assert record.is_bulk is not serialized


class TestBulkTarget:
    def test_from_record_copies_group(self):
        record = InventoryRecord(
            id=3, item_type_id=7, quantity=15, location_id=10, status_id=1, sloc_id=1, assigned_crew_id=2
        )
        target = BulkTarget.from_record(record)
        assert target.model_dump() == {
            "location_id": 10,
            "assigned_crew_id": 2,
            "area_id": None,
            "item_type_id": 7,
            "status_id": 1,
            "sloc_id": 1,
        }

    def test_from_record_with_overrides(self):
        record = InventoryRecord(item_type_id=7, location_id=10, status_id=1, sloc_id=1)
        target = BulkTarget.from_record(record, status_id=3, area_id=5)
        assert target.status_id == 3
        assert target.area_id == 5
        assert target.location_id == 10


class TestTransactionRecord:
    def test_defaults(self):
        transaction = TransactionRecord(transaction_type=TransactionType.ISSUE, action="Issue to Crew")
        assert transaction.item_type_name == "Unknown"
        assert transaction.quantity == 0
        assert transaction.date_time is not None

    def test_type_values(self):
        assert TransactionType.INSTALL.value == "Install"
        assert TransactionType("Receive") is TransactionType.RECEIVE


class TestReferenceSnapshot:
    def test_name_lookups(self):
        refs = build_snapshot()
        assert refs.item_type_name(7) == "Duct 1.25in"
        assert refs.item_type_name(999) == "Unknown"
        assert refs.status_name(2) == "Issued"
        assert refs.status_name(None) is None
        assert refs.crew_name(2) == "Crew 2"
        assert refs.area_name(99) == "Unknown"

    def test_lookup_by_name(self):
        refs = build_snapshot()
        assert refs.location_named("With Crew").id == 11
        assert refs.status_named("Rejected").id == 3
        assert refs.status_named("Missing") is None

    def test_config_value(self):
        refs = build_snapshot()
        assert refs.config_value("receivingLocation") == "10"
        assert refs.config_value("unknownKey") is None

    def test_snapshot_is_frozen(self):
        refs = build_snapshot()
        with pytest.raises(ValidationError):
            refs.config = {}
