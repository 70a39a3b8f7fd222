"""Data transfer objects."""

from fieldstock.application.dto.requests import (
    AdjustInventoryRequest,
    AdjustItem,
    FieldInstallItem,
    FieldInstallRequest,
    InspectInventoryRequest,
    InspectItem,
    IssueInventoryRequest,
    IssueItem,
    QuantityItem,
    ReceiveInventoryRequest,
    ReceiveItem,
    RejectInventoryRequest,
    RemoveInventoryRequest,
    ReturnInventoryRequest,
    UpsertBulkRequest,
)
from fieldstock.application.dto.responses import (
    ConsolidationResponse,
    ErrorResponse,
    HealthResponse,
    InventoryListResponse,
    InventoryRecordResponse,
    ItemResultResponse,
    OperationResponse,
    ProviderHealthResponse,
    TransactionListResponse,
    TransactionResponse,
    UpsertBulkResponse,
)

__all__ = [
    # Requests
    "AdjustInventoryRequest",
    "AdjustItem",
    "FieldInstallItem",
    "FieldInstallRequest",
    "InspectInventoryRequest",
    "InspectItem",
    "IssueInventoryRequest",
    "IssueItem",
    "QuantityItem",
    "ReceiveInventoryRequest",
    "ReceiveItem",
    "RejectInventoryRequest",
    "RemoveInventoryRequest",
    "ReturnInventoryRequest",
    "UpsertBulkRequest",
    # Responses
    "ConsolidationResponse",
    "ErrorResponse",
    "HealthResponse",
    "InventoryListResponse",
    "InventoryRecordResponse",
    "ItemResultResponse",
    "OperationResponse",
    "ProviderHealthResponse",
    "TransactionListResponse",
    "TransactionResponse",
    "UpsertBulkResponse",
]
