"""
Equivalence grouping for bulk inventory.

Two bulk records are the same physical stock when their equivalence keys are
equal. The upsert engine and the consolidation pass both group through
``key_of`` so they can never disagree.
"""

from collections.abc import Iterable
from typing import NamedTuple, Protocol

from fieldstock.core.entities.inventory import InventoryRecord


class EquivalenceKey(NamedTuple):
    """(location, crew, area, item type, status); None crew/area compare equal."""

    location_id: int
    assigned_crew_id: int | None
    area_id: int | None
    item_type_id: int
    status_id: int


class _Keyed(Protocol):
    location_id: int
    assigned_crew_id: int | None
    area_id: int | None
    item_type_id: int
    status_id: int


def key_of(record: _Keyed) -> EquivalenceKey:
    """Compute the grouping key of a record or target."""
    return EquivalenceKey(
        location_id=record.location_id,
        assigned_crew_id=record.assigned_crew_id,
        area_id=record.area_id,
        item_type_id=record.item_type_id,
        status_id=record.status_id,
    )


def group_bulk_records(
    records: Iterable[InventoryRecord],
) -> dict[EquivalenceKey, list[InventoryRecord]]:
    """Partition bulk records by key; serialized records are skipped."""
    groups: dict[EquivalenceKey, list[InventoryRecord]] = {}
    for record in records:
        if record.is_serialized:
            continue
        groups.setdefault(key_of(record), []).append(record)
    return groups
