"""Consolidate and upsert use cases: the bulk engine exposed to callers."""

from fieldstock.application.dto.requests import UpsertBulkRequest
from fieldstock.application.dto.responses import ConsolidationResponse, UpsertBulkResponse
from fieldstock.config import get_logger
from fieldstock.core.entities.inventory import BulkTarget
from fieldstock.core.interfaces.inventory_store import IInventoryStore
from fieldstock.core.services.consolidation import BulkConsolidator, ConsolidationSummary
from fieldstock.core.services.upsert_engine import BulkQuantityUpserter, UpsertOutcome

logger = get_logger(__name__)


class ConsolidateInventoryUseCase:
    """Run a consolidation pass over one SLOC on demand."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from fieldstock.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, sloc_id: int) -> ConsolidationSummary:
        """
        Consolidate ``sloc_id``.

        Raises:
            PersistenceError: The SLOC's records could not be read.
        """
        consolidator = BulkConsolidator(await self._get_inventory_store())
        return (await consolidator.consolidate(sloc_id)).unwrap()

    def to_response(self, summary: ConsolidationSummary) -> ConsolidationResponse:
        """Convert result to API response."""
        return ConsolidationResponse(
            consolidated=summary.consolidated,
            deleted=summary.deleted,
            failed_groups=summary.failed_groups,
        )


class UpsertBulkInventoryUseCase:
    """Apply a quantity delta to one equivalence group."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from fieldstock.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, request: UpsertBulkRequest) -> UpsertOutcome:
        """
        Add to or subtract from the group described by ``request``.

        Raises:
            InsufficientQuantityError: Subtract would go below zero.
            RecordNotFoundError: Subtract against a group with no record.
            PersistenceError: The store write failed.
        """
        target = BulkTarget(**request.model_dump(exclude={"quantity", "mode"}))
        upserter = BulkQuantityUpserter(await self._get_inventory_store())
        outcome = (await upserter.upsert(target, request.quantity, request.mode)).unwrap()

        logger.info(
            "bulk_upsert_complete",
            inventory_id=outcome.inventory_id,
            operation=outcome.operation.value,
            new_quantity=outcome.new_quantity,
        )
        return outcome

    def to_response(self, outcome: UpsertOutcome) -> UpsertBulkResponse:
        """Convert result to API response."""
        return UpsertBulkResponse(
            inventory_id=outcome.inventory_id,
            operation=outcome.operation.value,
            new_quantity=outcome.new_quantity,
        )
