"""Transaction history entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class TransactionType(str, Enum):
    """Kinds of inventory transactions."""

    RECEIVE = "Receive"
    ISSUE = "Issue"
    RETURN = "Return"
    REJECT = "Reject"
    INSPECT = "Inspect"
    INSTALL = "Install"
    REMOVE = "Remove"
    ADJUST = "Adjust"


class TransactionRecord(BaseModel):
    """
    Append-only audit entry.

    Names are denormalized snapshots so history stays readable after the
    referenced location, status, crew or area is renamed or removed.
    """

    id: int | None = None
    inventory_id: int | None = None
    transaction_type: TransactionType
    action: str
    item_type_name: str = "Unknown"
    quantity: int = 0
    old_quantity: int | None = None
    from_location_name: str | None = None
    to_location_name: str | None = None
    status_name: str | None = None
    old_status_name: str | None = None
    assigned_crew_name: str | None = None
    old_crew_name: str | None = None
    area_name: str | None = None
    old_area_name: str | None = None
    notes: str | None = None
    user_name: str | None = None
    date_time: datetime = Field(default_factory=datetime.utcnow)


class SequentialRecord(BaseModel):
    """Cable footage marker recorded during field install."""

    id: int | None = None
    inventory_id: int
    sequential_number: int
    notes: str | None = None
    recorded_at: datetime = Field(default_factory=datetime.utcnow)
