"""SQLite storage implementations."""

from fieldstock.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from fieldstock.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from fieldstock.infrastructure.storage.sqlite.reference_store import SQLiteReferenceStore
from fieldstock.infrastructure.storage.sqlite.schema import initialize_database
from fieldstock.infrastructure.storage.sqlite.transaction_store import SQLiteTransactionStore

# Singleton instances
_inventory_store: SQLiteInventoryStore | None = None
_transaction_store: SQLiteTransactionStore | None = None
_reference_store: SQLiteReferenceStore | None = None


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_transaction_store() -> SQLiteTransactionStore:
    """Get singleton transaction store instance."""
    global _transaction_store
    if _transaction_store is None:
        _transaction_store = SQLiteTransactionStore()
    return _transaction_store


async def get_reference_store() -> SQLiteReferenceStore:
    """Get singleton reference store instance."""
    global _reference_store
    if _reference_store is None:
        _reference_store = SQLiteReferenceStore()
    return _reference_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "initialize_database",
    # Store classes
    "SQLiteInventoryStore",
    "SQLiteReferenceStore",
    "SQLiteTransactionStore",
    # Factory functions
    "get_inventory_store",
    "get_reference_store",
    "get_transaction_store",
]
