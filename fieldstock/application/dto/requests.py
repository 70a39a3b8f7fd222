"""Request DTOs for inventory operations."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator


# --- Receive ---


class ReceiveItem(BaseModel):
    """One received line: a bulk quantity or a single serialized unit."""

    item_type_id: int
    quantity: int = Field(..., gt=0, description="Units received")
    mfgrsn: str | None = Field(default=None, description="Manufacturer serial number")
    tilsonsn: str | None = Field(default=None, description="Internal serial number")


class ReceiveInventoryRequest(BaseModel):
    """Receive items into the configured receiving location."""

    sloc_id: int
    items: list[ReceiveItem] = Field(..., min_length=1)
    notes: str | None = None


# --- Issue ---


class IssueItem(BaseModel):
    """
    Issue from a specific record, or from the receiving stock of an item type.

    With ``inventory_id`` the record is issued (partially when ``quantity`` is
    below its quantity). Without it, ``item_type_id`` and ``quantity`` are
    drawn from the Available group at the receiving location.
    """

    inventory_id: int | None = None
    item_type_id: int | None = None
    quantity: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_source(self) -> "IssueItem":
        if self.inventory_id is None and (self.item_type_id is None or self.quantity is None):
            raise ValueError("either inventory_id or item_type_id with quantity is required")
        return self


class IssueInventoryRequest(BaseModel):
    """Issue items to a crew and area."""

    crew_id: int
    area_id: int | None = None
    sloc_id: int | None = Field(default=None, description="Required for item-type sourced lines")
    items: list[IssueItem] = Field(..., min_length=1)
    notes: str | None = None


# --- Return / Reject / Field Install ---


class QuantityItem(BaseModel):
    """A record and how many of its units to act on (all when omitted)."""

    inventory_id: int
    quantity: int | None = Field(default=None, gt=0)


class ReturnInventoryRequest(BaseModel):
    """Return items to the receiving location as Available."""

    items: list[QuantityItem] = Field(..., min_length=1)
    notes: str | None = None


class RejectInventoryRequest(BaseModel):
    """Mark items (or part of a bulk record) as Rejected."""

    items: list[QuantityItem] = Field(..., min_length=1)
    comment: str | None = None


class FieldInstallItem(QuantityItem):
    """Install line with optional area override and footage marker."""

    area_id: int | None = None
    sequential_number: int | None = None
    sequential_verified: bool = Field(
        default=False,
        description="True when the sequential was read off the cable, not estimated",
    )


class FieldInstallRequest(BaseModel):
    """Install items in the field."""

    items: list[FieldInstallItem] = Field(..., min_length=1)
    notes: str | None = None


# --- Inspect ---


class InspectItem(BaseModel):
    """Inspection outcome for one record; the remainder stays uninspected."""

    inventory_id: int
    passed: int = Field(default=0, ge=0)
    rejected: int = Field(default=0, ge=0)


class InspectInventoryRequest(BaseModel):
    """Split records into passed and rejected portions."""

    items: list[InspectItem] = Field(..., min_length=1)
    notes: str | None = None


# --- Remove / Adjust ---


class RemoveInventoryRequest(BaseModel):
    """Move records to an outgoing location with status Removed."""

    inventory_ids: list[int] = Field(..., min_length=1)
    outgoing_location_id: int
    notes: str | None = None


class AdjustItem(BaseModel):
    """Absolute quantity correction for one record."""

    inventory_id: int
    new_quantity: int


class AdjustInventoryRequest(BaseModel):
    """Correct record quantities."""

    items: list[AdjustItem] = Field(..., min_length=1)
    reason: str | None = None


# --- Engine ---


class UpsertBulkRequest(BaseModel):
    """Apply a quantity delta directly to an equivalence group."""

    sloc_id: int
    location_id: int
    item_type_id: int
    status_id: int
    assigned_crew_id: int | None = None
    area_id: int | None = None
    quantity: int = Field(..., gt=0)
    mode: Literal["add", "subtract"] = "add"
