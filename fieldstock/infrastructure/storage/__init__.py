"""Storage infrastructure implementations."""

from fieldstock.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteReferenceStore,
    SQLiteTransactionStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteInventoryStore",
    "SQLiteReferenceStore",
    "SQLiteTransactionStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
