"""Core domain services."""

from fieldstock.core.services.consolidation import BulkConsolidator, ConsolidationSummary
from fieldstock.core.services.equivalence import EquivalenceKey, group_bulk_records, key_of
from fieldstock.core.services.transaction_logger import TransactionLogger
from fieldstock.core.services.upsert_engine import (
    BulkQuantityUpserter,
    UpsertMode,
    UpsertOperation,
    UpsertOutcome,
)

__all__ = [
    "BulkConsolidator",
    "BulkQuantityUpserter",
    "ConsolidationSummary",
    "EquivalenceKey",
    "TransactionLogger",
    "UpsertMode",
    "UpsertOperation",
    "UpsertOutcome",
    "group_bulk_records",
    "key_of",
]
