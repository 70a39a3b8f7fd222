"""Shared test data: seeded reference ids and a fake edge client."""

from typing import Any

from fieldstock.core.entities.inventory import InventoryRecord
from fieldstock.core.entities.reference import ItemType, NamedReference, ReferenceSnapshot
from fieldstock.core.exceptions import EdgeFunctionError
from fieldstock.core.interfaces.edge_functions import IEdgeFunctionClient

# Reference data shared by the seeded database and the in-memory snapshot
ITEM_TYPES = [
    (1, "Fiber Reel 144ct", 1),
    (7, "Duct 1.25in", 2),
    (8, "Handhole 17x30", 2),
]
STATUSES = [(1, "Available"), (2, "Issued"), (3, "Rejected"), (4, "Installed"), (5, "Removed")]
LOCATIONS = [(10, "Warehouse"), (11, "With Crew"), (12, "Field Installed"), (13, "Scrap Yard")]
CREWS = [(2, "Crew 2"), (4, "Crew 4")]
AREAS = [(3, "Area 3"), (5, "Area 5")]
CONFIG = [("receivingLocation", "10"), ("receivingStatus", "Available")]

SERIAL_TYPE = 1
DUCT = 7
HANDHOLE = 8
AVAILABLE, ISSUED, REJECTED, INSTALLED, REMOVED = 1, 2, 3, 4, 5
WAREHOUSE, WITH_CREW, FIELD_INSTALLED, SCRAP_YARD = 10, 11, 12, 13


class FakeEdgeClient(IEdgeFunctionClient):
    """Records calls; fails or returns ``data`` as configured."""

    def __init__(self, enabled: bool = True, fail: bool = False, data: Any = None):
        self._enabled = enabled
        self.fail = fail
        self.data = data
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def invoke(self, function: str, payload: dict[str, Any]) -> Any:
        self.calls.append((function, payload))
        if self.fail:
            raise EdgeFunctionError(function, "HTTP 500", status_code=500)
        return self.data


def build_snapshot(**overrides: Any) -> ReferenceSnapshot:
    """Snapshot matching the seeded reference tables."""
    values: dict[str, Any] = {
        "item_types": {
            id_: ItemType(id=id_, name=name, inventory_type_id=type_id)
            for id_, name, type_id in ITEM_TYPES
        },
        "statuses": {id_: NamedReference(id=id_, name=name) for id_, name in STATUSES},
        "locations": {id_: NamedReference(id=id_, name=name) for id_, name in LOCATIONS},
        "crews": {id_: NamedReference(id=id_, name=name) for id_, name in CREWS},
        "areas": {id_: NamedReference(id=id_, name=name) for id_, name in AREAS},
        "config": dict(CONFIG),
    }
    values.update(overrides)
    return ReferenceSnapshot(**values)


async def sloc_total(store: Any, sloc_id: int) -> int:
    """Sum of quantities over every record in a SLOC."""
    return sum(record.quantity for record in await store.list_by_sloc(sloc_id))


async def sloc_state(store: Any, sloc_id: int) -> list[tuple]:
    """Order-independent view of a SLOC: (key..., serials, quantity) per record."""
    return sorted(
        (
            r.location_id,
            r.assigned_crew_id or 0,
            r.area_id or 0,
            r.item_type_id,
            r.status_id,
            r.mfgrsn or "",
            r.tilsonsn or "",
            r.quantity,
        )
        for r in await store.list_by_sloc(sloc_id)
    )


async def add_record(
    store: Any,
    item_type_id: int = DUCT,
    quantity: int = 1,
    location_id: int = WAREHOUSE,
    status_id: int = AVAILABLE,
    sloc_id: int = 1,
    **fields: Any,
) -> InventoryRecord:
    """Insert a record directly through the store."""
    return await store.create_record(
        InventoryRecord(
            item_type_id=item_type_id,
            quantity=quantity,
            location_id=location_id,
            status_id=status_id,
            sloc_id=sloc_id,
            **fields,
        )
    )
