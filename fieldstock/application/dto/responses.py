"""Response DTOs for the inventory API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ItemResultResponse(BaseModel):
    """Outcome for one item of a batch operation."""

    success: bool
    inventory_id: int | None = None
    operation: str | None = None
    quantity: int | None = None
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class ConsolidationResponse(BaseModel):
    """Counts from a consolidation pass."""

    consolidated: int
    deleted: int
    failed_groups: int = 0


class OperationResponse(BaseModel):
    """Batch operation outcome."""

    operation: str
    strategy: str
    summary: str = Field(..., description="'N succeeded, M failed'")
    succeeded: int
    failed: int
    results: list[ItemResultResponse]
    consolidation: ConsolidationResponse | None = None


class UpsertBulkResponse(BaseModel):
    """Upsert engine outcome."""

    inventory_id: int
    operation: str
    new_quantity: int


class InventoryRecordResponse(BaseModel):
    """Inventory record."""

    id: int
    item_type_id: int
    quantity: int
    location_id: int
    status_id: int
    sloc_id: int
    assigned_crew_id: int | None = None
    area_id: int | None = None
    mfgrsn: str | None = None
    tilsonsn: str | None = None
    created_at: datetime
    updated_at: datetime


class InventoryListResponse(BaseModel):
    """Records in a SLOC."""

    sloc_id: int
    records: list[InventoryRecordResponse]
    total_quantity: int


class TransactionResponse(BaseModel):
    """Transaction history entry."""

    id: int | None = None
    inventory_id: int | None = None
    transaction_type: str
    action: str
    item_type_name: str
    quantity: int
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
    date_time: datetime


class TransactionListResponse(BaseModel):
    """Transaction history page."""

    transactions: list[TransactionResponse]
    total: int


class ProviderHealthResponse(BaseModel):
    """Dependency health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None
    edge_functions: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_QUANTITY)
    - message: human-readable description
    - hint: suggested recovery action
    - details: structured context from the domain error
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    details: dict[str, Any] = Field(default_factory=dict, description="Structured error context")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
