"""
Dependency injection container for FastAPI.

Provides use cases, stores and the per-request reference snapshot to route
handlers.
"""

from functools import lru_cache

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
from fieldstock.config import Settings, get_settings
from fieldstock.core.entities.reference import ReferenceSnapshot
from fieldstock.infrastructure.edge import EdgeFunctionClient, get_edge_client
from fieldstock.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteTransactionStore,
    get_inventory_store,
    get_reference_store,
    get_transaction_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Reference data
async def get_reference_snapshot() -> ReferenceSnapshot:
    """Load a fresh read-only snapshot of reference tables and config."""
    store = await get_reference_store()
    return await store.load_snapshot()


# Store dependencies
async def get_inv_store() -> SQLiteInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


async def get_txn_store() -> SQLiteTransactionStore:
    """Get transaction store."""
    return await get_transaction_store()


def get_edge() -> EdgeFunctionClient:
    """Get edge function client."""
    return get_edge_client()


# Operation use cases
def get_receive_use_case() -> ReceiveInventoryUseCase:
    """Get receive inventory use case."""
    return ReceiveInventoryUseCase()


def get_issue_use_case() -> IssueInventoryUseCase:
    """Get issue inventory use case."""
    return IssueInventoryUseCase()


def get_return_use_case() -> ReturnInventoryUseCase:
    """Get return inventory use case."""
    return ReturnInventoryUseCase()


def get_reject_use_case() -> RejectInventoryUseCase:
    """Get reject inventory use case."""
    return RejectInventoryUseCase()


def get_inspect_use_case() -> InspectInventoryUseCase:
    """Get inspect inventory use case."""
    return InspectInventoryUseCase()


def get_field_install_use_case() -> FieldInstallInventoryUseCase:
    """Get field install use case."""
    return FieldInstallInventoryUseCase()


def get_remove_use_case() -> RemoveInventoryUseCase:
    """Get remove inventory use case."""
    return RemoveInventoryUseCase()


def get_adjust_use_case() -> AdjustInventoryUseCase:
    """Get adjust inventory use case."""
    return AdjustInventoryUseCase()


# Engine use cases
def get_consolidate_use_case() -> ConsolidateInventoryUseCase:
    """Get consolidate inventory use case."""
    return ConsolidateInventoryUseCase()


def get_upsert_bulk_use_case() -> UpsertBulkInventoryUseCase:
    """Get bulk upsert use case."""
    return UpsertBulkInventoryUseCase()
