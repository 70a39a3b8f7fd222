"""Inventory domain entities."""

from datetime import datetime

from pydantic import BaseModel, Field


class InventoryRecord(BaseModel):
    """One row of physical stock within a stock location (SLOC)."""

    id: int | None = None
    item_type_id: int
    quantity: int = Field(default=1, ge=0)  # serialized records always carry 1
    location_id: int
    status_id: int
    sloc_id: int
    assigned_crew_id: int | None = None
    area_id: int | None = None
    mfgrsn: str | None = None  # manufacturer serial number
    tilsonsn: str | None = None  # internal serial number
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_serialized(self) -> bool:
        """Either serial marks the record as serialized, never a consolidation target."""
        return bool(self.mfgrsn or self.tilsonsn)

    @property
    def is_bulk(self) -> bool:
        return not self.is_serialized


class BulkTarget(BaseModel):
    """Fully specified equivalence group inside one SLOC."""

    location_id: int
    assigned_crew_id: int | None = None
    area_id: int | None = None
    item_type_id: int
    status_id: int
    sloc_id: int

    @classmethod
    def from_record(cls, record: InventoryRecord, **overrides: int | None) -> "BulkTarget":
        """Target the record's own group, optionally moving some attributes."""
        values = {
            "location_id": record.location_id,
            "assigned_crew_id": record.assigned_crew_id,
            "area_id": record.area_id,
            "item_type_id": record.item_type_id,
            "status_id": record.status_id,
            "sloc_id": record.sloc_id,
        }
        values.update(overrides)
        return cls(**values)
