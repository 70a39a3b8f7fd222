"""Abstract interface for hosted edge function calls."""

from abc import ABC, abstractmethod
from typing import Any


class IEdgeFunctionClient(ABC):
    """Client for server-side implementations of inventory operations."""

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """Whether remote calls should be attempted at all."""
        pass

    @abstractmethod
    async def invoke(self, function: str, payload: dict[str, Any]) -> Any:
        """
        Call an edge function and return its ``data`` payload.

        Raises:
            EdgeFunctionError: On transport failure or an unsuccessful response
        """
        pass
