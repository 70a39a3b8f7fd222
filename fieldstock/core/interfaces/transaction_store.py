"""Abstract interface for transaction history storage."""

from abc import ABC, abstractmethod

from fieldstock.core.entities.transaction import SequentialRecord, TransactionRecord


class ITransactionStore(ABC):
    """Interface for append-only transaction and sequential persistence."""

    @abstractmethod
    async def add_transaction(self, transaction: TransactionRecord) -> TransactionRecord:
        """Append a transaction record."""
        pass

    @abstractmethod
    async def list_transactions(
        self,
        inventory_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[TransactionRecord]:
        """List transactions, newest first."""
        pass

    @abstractmethod
    async def add_sequential(self, sequential: SequentialRecord) -> SequentialRecord:
        """Append a sequential footage record."""
        pass
