"""Core interfaces (ports) for dependency injection."""

from fieldstock.core.interfaces.edge_functions import IEdgeFunctionClient
from fieldstock.core.interfaces.inventory_store import IInventoryStore
from fieldstock.core.interfaces.reference_store import IReferenceStore
from fieldstock.core.interfaces.transaction_store import ITransactionStore

__all__ = [
    "IEdgeFunctionClient",
    "IInventoryStore",
    "IReferenceStore",
    "ITransactionStore",
]
