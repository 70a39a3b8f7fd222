"""Core domain entities."""

from fieldstock.core.entities.inventory import BulkTarget, InventoryRecord
from fieldstock.core.entities.reference import ItemType, NamedReference, ReferenceSnapshot
from fieldstock.core.entities.transaction import (
    SequentialRecord,
    TransactionRecord,
    TransactionType,
)

__all__ = [
    "BulkTarget",
    "InventoryRecord",
    "ItemType",
    "NamedReference",
    "ReferenceSnapshot",
    "SequentialRecord",
    "TransactionRecord",
    "TransactionType",
]
