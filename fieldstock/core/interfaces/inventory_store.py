"""Abstract interface for inventory record storage."""

from abc import ABC, abstractmethod

from fieldstock.core.entities.inventory import BulkTarget, InventoryRecord


class IInventoryStore(ABC):
    """Interface for inventory record persistence."""

    @abstractmethod
    async def get_record(self, record_id: int) -> InventoryRecord | None:
        """Get inventory record by ID."""
        pass

    @abstractmethod
    async def list_by_sloc(self, sloc_id: int) -> list[InventoryRecord]:
        """List every record in a SLOC, ordered by ID."""
        pass

    @abstractmethod
    async def list_bulk_by_sloc(self, sloc_id: int) -> list[InventoryRecord]:
        """List records with neither serial number in a SLOC, ordered by ID."""
        pass

    @abstractmethod
    async def find_bulk(self, target: BulkTarget) -> list[InventoryRecord]:
        """Find bulk records exactly matching the target group, ordered by ID."""
        pass

    @abstractmethod
    async def create_record(self, record: InventoryRecord) -> InventoryRecord:
        """Insert a record and assign its ID."""
        pass

    @abstractmethod
    async def update_record(self, record: InventoryRecord) -> InventoryRecord:
        """Update a record by ID, refreshing updated_at."""
        pass

    @abstractmethod
    async def delete_record(self, record_id: int) -> None:
        """Delete a record by ID."""
        pass
