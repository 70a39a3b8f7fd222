"""Abstract interface for reference data lookup."""

from abc import ABC, abstractmethod

from fieldstock.core.entities.reference import ReferenceSnapshot


class IReferenceStore(ABC):
    """Read-only access to item types, statuses, locations, crews, areas and config."""

    @abstractmethod
    async def load_snapshot(self) -> ReferenceSnapshot:
        """Load all reference tables and configuration into a snapshot."""
        pass
