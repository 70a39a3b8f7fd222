"""
Execution strategies for inventory operations.

An operation is run by the first strategy in its list that completes. The
remote strategy hands the whole batch to an edge function; the local
strategy performs the same changes directly against the stores. Both must
leave the inventory in the same final state.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from fieldstock.config import get_logger
from fieldstock.core.exceptions import EdgeFunctionUnavailableError
from fieldstock.core.interfaces.edge_functions import IEdgeFunctionClient

if TYPE_CHECKING:
    from fieldstock.application.use_cases.base import (
        InventoryOperationUseCase,
        ItemResult,
        OperationContext,
    )

logger = get_logger(__name__)


class OperationStrategy(ABC):
    """How an operation's item list gets applied."""

    name: str = ""

    @abstractmethod
    async def run(
        self,
        use_case: "InventoryOperationUseCase",
        request: Any,
        ctx: "OperationContext",
    ) -> list["ItemResult"]:
        """Apply the request and return one result per item."""
        pass


class LocalStrategy(OperationStrategy):
    """Direct store sequence: upsert, split, log."""

    name = "local"

    async def run(
        self,
        use_case: "InventoryOperationUseCase",
        request: Any,
        ctx: "OperationContext",
    ) -> list["ItemResult"]:
        return await use_case.run_local(request, ctx)


class RemoteStrategy(OperationStrategy):
    """Server-side edge function; raises EdgeFunctionError so the caller can fall back."""

    name = "remote"

    def __init__(self, edge_client: IEdgeFunctionClient):
        self._client = edge_client

    async def run(
        self,
        use_case: "InventoryOperationUseCase",
        request: Any,
        ctx: "OperationContext",
    ) -> list["ItemResult"]:
        function = use_case.function_for(request, ctx)
        if not self._client.enabled:
            raise EdgeFunctionUnavailableError(function)

        data = await self._client.invoke(function, use_case.remote_payload(request, ctx))
        logger.info("operation_remote_complete", operation=use_case.operation_name, function=function)
        return use_case.results_from_remote(request, data)


def default_strategies(edge_client: IEdgeFunctionClient | None) -> list[OperationStrategy]:
    """Remote first when edge functions are enabled, local otherwise."""
    if edge_client is not None and edge_client.enabled:
        return [RemoteStrategy(edge_client), LocalStrategy()]
    return [LocalStrategy()]
