"""
Application layer - Use cases, DTOs, and execution strategies.

This layer orchestrates the inventory core by:
1. Defining request/response DTOs for API contracts
2. Implementing one use case per inventory operation
3. Choosing between the remote and local execution strategies

Use cases are the only entry point for API handlers.
"""

from fieldstock.application.dto.requests import (
    AdjustInventoryRequest,
    FieldInstallRequest,
    InspectInventoryRequest,
    IssueInventoryRequest,
    ReceiveInventoryRequest,
    RejectInventoryRequest,
    RemoveInventoryRequest,
    ReturnInventoryRequest,
    UpsertBulkRequest,
)
from fieldstock.application.dto.responses import (
    ConsolidationResponse,
    ErrorResponse,
    OperationResponse,
    UpsertBulkResponse,
)
from fieldstock.application.strategies import (
    LocalStrategy,
    OperationStrategy,
    RemoteStrategy,
    default_strategies,
)
from fieldstock.application.use_cases import (
    AdjustInventoryUseCase,
    ConsolidateInventoryUseCase,
    FieldInstallInventoryUseCase,
    InspectInventoryUseCase,
    IssueInventoryUseCase,
    ReceiveInventoryUseCase,
    RejectInventoryUseCase,
    RemoveInventoryUseCase,
    ReturnInventoryUseCase,
    UpsertBulkInventoryUseCase,
)

__all__ = [
    # Request DTOs
    "ReceiveInventoryRequest",
    "IssueInventoryRequest",
    "ReturnInventoryRequest",
    "RejectInventoryRequest",
    "InspectInventoryRequest",
    "FieldInstallRequest",
    "RemoveInventoryRequest",
    "AdjustInventoryRequest",
    "UpsertBulkRequest",
    # Response DTOs
    "OperationResponse",
    "ConsolidationResponse",
    "UpsertBulkResponse",
    "ErrorResponse",
    # Strategies
    "OperationStrategy",
    "RemoteStrategy",
    "LocalStrategy",
    "default_strategies",
    # Use Cases
    "ReceiveInventoryUseCase",
    "IssueInventoryUseCase",
    "ReturnInventoryUseCase",
    "RejectInventoryUseCase",
    "InspectInventoryUseCase",
    "FieldInstallInventoryUseCase",
    "RemoveInventoryUseCase",
    "AdjustInventoryUseCase",
    "ConsolidateInventoryUseCase",
    "UpsertBulkInventoryUseCase",
]
