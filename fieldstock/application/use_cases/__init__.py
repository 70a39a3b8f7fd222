"""Application use cases."""

from fieldstock.application.use_cases.adjust_inventory import AdjustInventoryUseCase
from fieldstock.application.use_cases.base import (
    InventoryOperationUseCase,
    ItemResult,
    OperationContext,
    OperationResult,
)
from fieldstock.application.use_cases.consolidate_inventory import (
    ConsolidateInventoryUseCase,
    UpsertBulkInventoryUseCase,
)
from fieldstock.application.use_cases.field_install_inventory import FieldInstallInventoryUseCase
from fieldstock.application.use_cases.inspect_inventory import InspectInventoryUseCase
from fieldstock.application.use_cases.issue_inventory import IssueInventoryUseCase
from fieldstock.application.use_cases.receive_inventory import ReceiveInventoryUseCase
from fieldstock.application.use_cases.reject_inventory import RejectInventoryUseCase
from fieldstock.application.use_cases.remove_inventory import RemoveInventoryUseCase
from fieldstock.application.use_cases.return_inventory import ReturnInventoryUseCase

__all__ = [
    "InventoryOperationUseCase",
    "ItemResult",
    "OperationContext",
    "OperationResult",
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
