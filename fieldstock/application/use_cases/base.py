"""
Shared shape of the inventory operation use cases.

Every operation follows the same sequence: resolve required references and
load source records, apply the item list through the first strategy that
completes, consolidate the touched SLOCs, and report per-item results.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

from fieldstock.application.dto.responses import (
    ConsolidationResponse,
    ItemResultResponse,
    OperationResponse,
)
from fieldstock.application.strategies import OperationStrategy, default_strategies
from fieldstock.config import get_logger, get_settings, operation_scope
from fieldstock.config.settings import InventorySettings
from fieldstock.core.entities.inventory import BulkTarget, InventoryRecord
from fieldstock.core.entities.reference import NamedReference, ReferenceSnapshot
from fieldstock.core.entities.transaction import TransactionRecord, TransactionType
from fieldstock.core.exceptions import (
    ConfigurationError,
    EdgeFunctionError,
    FieldStockError,
    InsufficientQuantityError,
    PersistenceError,
    RecordNotFoundError,
    RequiredReferenceMissingError,
    ValidationError,
)
from fieldstock.core.interfaces.edge_functions import IEdgeFunctionClient
from fieldstock.core.interfaces.inventory_store import IInventoryStore
from fieldstock.core.interfaces.transaction_store import ITransactionStore
from fieldstock.core.result import Err
from fieldstock.core.services.consolidation import BulkConsolidator, ConsolidationSummary
from fieldstock.core.services.transaction_logger import TransactionLogger
from fieldstock.core.services.upsert_engine import BulkQuantityUpserter

logger = get_logger(__name__)


@dataclass
class ItemResult:
    """Outcome for one item of a batch."""

    success: bool
    inventory_id: int | None = None
    operation: str | None = None
    quantity: int | None = None
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, error: FieldStockError, inventory_id: int | None = None) -> "ItemResult":
        return cls(
            success=False,
            inventory_id=inventory_id,
            error=error.message,
            error_code=error.code,
            details=error.details,
        )


@dataclass
class OperationContext:
    """
    Everything one execution works from.

    ``refs`` is the read-only reference snapshot; ``targets`` holds the
    statuses and locations resolved from it; ``records`` are the source
    records loaded before any write.
    """

    refs: ReferenceSnapshot
    targets: dict[str, NamedReference] = field(default_factory=dict)
    records: dict[int, InventoryRecord | None] = field(default_factory=dict)
    touched_slocs: set[int] = field(default_factory=set)


@dataclass
class OperationResult:
    """Batch outcome returned to callers."""

    operation: str
    items: list[ItemResult]
    strategy: str
    consolidation: ConsolidationSummary | None = None

    @property
    def succeeded(self) -> int:
        return sum(1 for item in self.items if item.success)

    @property
    def failed(self) -> int:
        return len(self.items) - self.succeeded

    @property
    def summary(self) -> str:
        return f"{self.succeeded} succeeded, {self.failed} failed"


@dataclass
class MoveOutcome:
    """Where moved units ended up."""

    inventory_id: int
    partial: bool
    quantity: int
    remaining: int


class InventoryOperationUseCase(ABC):
    """Base for receive, issue, return, reject, inspect, field install, remove and adjust."""

    operation_name: str = ""
    function_name: str = ""
    consolidates: bool = True

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        transaction_store: ITransactionStore | None = None,
        edge_client: IEdgeFunctionClient | None = None,
        strategies: list[OperationStrategy] | None = None,
        user_name: str | None = None,
    ):
        self._inventory_store = inventory_store
        self._transaction_store = transaction_store
        self._edge_client = edge_client
        self._strategies = strategies
        self._user_name = user_name
        self._upserter: BulkQuantityUpserter | None = None
        self._consolidator: BulkConsolidator | None = None
        self._transaction_logger: TransactionLogger | None = None

    @property
    def settings(self) -> InventorySettings:
        return get_settings().inventory

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from fieldstock.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_transaction_store(self) -> ITransactionStore:
        if self._transaction_store is None:
            from fieldstock.infrastructure.storage.sqlite import get_transaction_store

            self._transaction_store = await get_transaction_store()
        return self._transaction_store

    def _get_edge_client(self) -> IEdgeFunctionClient:
        if self._edge_client is None:
            from fieldstock.infrastructure.edge import get_edge_client

            self._edge_client = get_edge_client()
        return self._edge_client

    def _get_strategies(self) -> list[OperationStrategy]:
        if self._strategies is None:
            self._strategies = default_strategies(self._get_edge_client())
        return self._strategies

    async def _get_upserter(self) -> BulkQuantityUpserter:
        if self._upserter is None:
            self._upserter = BulkQuantityUpserter(await self._get_inventory_store())
        return self._upserter

    async def _get_consolidator(self) -> BulkConsolidator:
        if self._consolidator is None:
            self._consolidator = BulkConsolidator(await self._get_inventory_store())
        return self._consolidator

    async def _get_transaction_logger(self) -> TransactionLogger:
        if self._transaction_logger is None:
            self._transaction_logger = TransactionLogger(
                await self._get_transaction_store(),
                edge_client=self._get_edge_client(),
                user_name=self._user_name or get_settings().user_name,
            )
        return self._transaction_logger

    # --- Execution ---

    async def execute(self, request: Any, refs: ReferenceSnapshot) -> OperationResult:
        """
        Run the operation over every item in the request.

        Raises:
            RequiredReferenceMissingError: A needed status, location or config
                value is absent; nothing has been written.
            ValidationError: The request as a whole is unusable.
        """
        with operation_scope(self.operation_name):
            items = self.request_items(request)
            logger.info("operation_started", items=len(items))

            # 1. Resolve references and load source records
            ctx = OperationContext(refs=refs)
            await self.prepare(request, ctx)

            # 2. Apply through the first strategy that completes
            results, strategy = await self._dispatch(request, ctx)

            # 3. Collapse duplicate groups left by splits and merges
            consolidation = None
            if self.consolidates and ctx.touched_slocs:
                consolidation = await self._consolidate(ctx.touched_slocs)

            result = OperationResult(
                operation=self.operation_name,
                items=results,
                strategy=strategy,
                consolidation=consolidation,
            )
            logger.info(
                "operation_complete",
                strategy=strategy,
                succeeded=result.succeeded,
                failed=result.failed,
            )
            return result

    async def _dispatch(
        self,
        request: Any,
        ctx: OperationContext,
    ) -> tuple[list[ItemResult], str]:
        last_error: EdgeFunctionError | None = None
        for strategy in self._get_strategies():
            try:
                return await strategy.run(self, request, ctx), strategy.name
            except EdgeFunctionError as e:
                last_error = e
                logger.warning(
                    "operation_strategy_failed",
                    strategy=strategy.name,
                    error=e.message,
                )
        if last_error is not None:
            raise last_error
        raise ConfigurationError("No execution strategy configured")

    async def _consolidate(self, sloc_ids: set[int]) -> ConsolidationSummary:
        consolidator = await self._get_consolidator()
        total = ConsolidationSummary()
        for sloc_id in sorted(sloc_ids):
            result = await consolidator.consolidate(sloc_id)
            if isinstance(result, Err):
                logger.error(
                    "operation_consolidation_failed",
                    sloc_id=sloc_id,
                    error=result.error.message,
                )
                continue
            total.consolidated += result.value.consolidated
            total.deleted += result.value.deleted
            total.failed_groups += result.value.failed_groups
        return total

    async def run_local(self, request: Any, ctx: OperationContext) -> list[ItemResult]:
        """Process items one at a time; a failing item never stops the batch."""
        results: list[ItemResult] = []
        for index, item in enumerate(self.request_items(request)):
            inventory_id = getattr(item, "inventory_id", None)
            try:
                results.append(await self.process_item(item, request, ctx))
            except FieldStockError as e:
                logger.warning(
                    "operation_item_failed",
                    index=index,
                    inventory_id=inventory_id,
                    item=self._describe(item, ctx),
                    error=e.message,
                )
                results.append(ItemResult.failure(e, inventory_id))
            except Exception as e:
                logger.error(
                    "operation_item_error",
                    index=index,
                    inventory_id=inventory_id,
                    item=self._describe(item, ctx),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                results.append(
                    ItemResult.failure(PersistenceError(self.operation_name, str(e)), inventory_id)
                )
        return results

    def _describe(self, item: Any, ctx: OperationContext) -> dict[str, Any]:
        """Item type, quantity and group of a failing item for the log."""
        description = item.model_dump() if hasattr(item, "model_dump") else {"item": item}
        record = ctx.records.get(getattr(item, "inventory_id", None) or -1)
        if record is not None:
            description["item_type"] = ctx.refs.item_type_name(record.item_type_id)
            description["record_quantity"] = record.quantity
            description["key"] = [
                record.location_id,
                record.assigned_crew_id,
                record.area_id,
                record.item_type_id,
                record.status_id,
            ]
        return description

    # --- Hooks ---

    def request_items(self, request: Any) -> Sequence[Any]:
        return request.items

    def record_ids(self, request: Any) -> list[int]:
        return [
            item.inventory_id
            for item in self.request_items(request)
            if getattr(item, "inventory_id", None) is not None
        ]

    def resolve_references(self, request: Any, ctx: OperationContext) -> None:
        """Populate ``ctx.targets``; raise RequiredReferenceMissingError when absent."""

    async def prepare(self, request: Any, ctx: OperationContext) -> None:
        self.resolve_references(request, ctx)

        store = await self._get_inventory_store()
        try:
            for record_id in self.record_ids(request):
                if record_id in ctx.records:
                    continue
                record = await store.get_record(record_id)
                ctx.records[record_id] = record
                if record is not None:
                    ctx.touched_slocs.add(record.sloc_id)
        except FieldStockError:
            raise
        except Exception as e:
            raise PersistenceError("load source records", str(e)) from e

    @abstractmethod
    async def process_item(self, item: Any, request: Any, ctx: OperationContext) -> ItemResult:
        """Apply one item locally."""
        pass

    def function_for(self, request: Any, ctx: OperationContext) -> str:
        return self.function_name

    @abstractmethod
    def remote_payload(self, request: Any, ctx: OperationContext) -> dict[str, Any]:
        """Edge function body for the whole batch."""
        pass

    def results_from_remote(self, request: Any, data: Any) -> list[ItemResult]:
        """Map an edge function ``data`` payload onto per-item results."""
        items = self.request_items(request)
        remote = data.get("results") if isinstance(data, dict) else None
        if isinstance(remote, list) and len(remote) == len(items):
            results = []
            for entry in remote:
                entry = entry if isinstance(entry, dict) else {}
                results.append(
                    ItemResult(
                        success=bool(entry.get("success")),
                        inventory_id=entry.get("inventory_id"),
                        operation=entry.get("operation"),
                        quantity=entry.get("quantity"),
                        error=entry.get("error"),
                    )
                )
            return results
        return [
            ItemResult(success=True, inventory_id=getattr(item, "inventory_id", None), operation="remote")
            for item in items
        ]

    # --- Helpers for subclasses ---

    def require_status(self, ctx: OperationContext, name: str) -> NamedReference:
        status = ctx.refs.status_named(name)
        if status is None:
            raise RequiredReferenceMissingError("status", name)
        ctx.targets[f"status:{name}"] = status
        return status

    def require_location(self, ctx: OperationContext, name: str) -> NamedReference:
        location = ctx.refs.location_named(name)
        if location is None:
            raise RequiredReferenceMissingError("location", name)
        ctx.targets[f"location:{name}"] = location
        return location

    def require_receiving_location(self, ctx: OperationContext) -> NamedReference:
        """Receiving location from the ``receivingLocation`` config value (an ID)."""
        raw = ctx.refs.config_value(self.settings.receiving_location_key)
        location = None
        if raw is not None:
            try:
                location = ctx.refs.locations.get(int(raw))
            except ValueError:
                location = ctx.refs.location_named(raw)
        if location is None:
            raise RequiredReferenceMissingError("location", "Receiving")
        ctx.targets["location:receiving"] = location
        return location

    def require_receiving_status(self, ctx: OperationContext) -> NamedReference:
        name = (
            ctx.refs.config_value(self.settings.receiving_status_key)
            or self.settings.default_receiving_status
        )
        status = self.require_status(ctx, name)
        ctx.targets["status:receiving"] = status
        return status

    async def record_for(self, ctx: OperationContext, inventory_id: int) -> InventoryRecord:
        """
        Current state of a source record.

        Earlier items in the batch may have merged units into the record or
        deleted it, so it is read again rather than taken from ``prepare``.
        """
        store = await self._get_inventory_store()
        record = await store.get_record(inventory_id)
        if record is None:
            ctx.records[inventory_id] = None
            raise RecordNotFoundError(f"id {inventory_id}", details={"inventory_id": inventory_id})
        ctx.records[inventory_id] = record
        ctx.touched_slocs.add(record.sloc_id)
        return record

    def is_serialized_item(self, record: InventoryRecord, refs: ReferenceSnapshot) -> bool:
        """Item type decides; serial numbers decide when the type is unknown."""
        item_type = refs.item_type(record.item_type_id)
        if item_type is None:
            return record.is_serialized
        return item_type.inventory_type_id == self.settings.serialized_type_id

    async def update_in_place(
        self,
        record: InventoryRecord,
        ctx: OperationContext,
        **changes: Any,
    ) -> InventoryRecord:
        """Change attributes of a record without splitting it."""
        for attr, value in changes.items():
            setattr(record, attr, value)
        store = await self._get_inventory_store()
        ctx.touched_slocs.add(record.sloc_id)
        return await store.update_record(record)

    async def split_or_move(
        self,
        record: InventoryRecord,
        quantity: int,
        ctx: OperationContext,
        **changes: Any,
    ) -> MoveOutcome:
        """
        Move ``quantity`` units of ``record`` to the group described by ``changes``.

        Moving the whole record changes it in place. Moving part of it reduces
        the source and adds the units to the destination group (merging into an
        existing record there). If the destination write fails the source is
        restored before the error propagates.
        """
        if quantity <= 0:
            raise ValidationError("quantity", "must be greater than zero", quantity)
        if quantity > record.quantity:
            raise InsufficientQuantityError(record.quantity, quantity, record.id)

        if quantity == record.quantity:
            await self.update_in_place(record, ctx, **changes)
            return MoveOutcome(record.id, partial=False, quantity=quantity, remaining=0)  # type: ignore[arg-type]

        store = await self._get_inventory_store()
        ctx.touched_slocs.add(record.sloc_id)
        original_quantity = record.quantity
        record.quantity = original_quantity - quantity
        await store.update_record(record)

        try:
            if record.is_serialized:
                # Footage split of a serialized reel keeps its serials
                moved = record.model_copy(update={"id": None, "quantity": quantity, **changes})
                moved = await store.create_record(moved)
                destination_id = moved.id
            else:
                upserter = await self._get_upserter()
                target = BulkTarget.from_record(record, **changes)
                destination_id = (await upserter.add(target, quantity)).unwrap().inventory_id
        except Exception:
            await self._restore_quantity(record, original_quantity)
            raise

        return MoveOutcome(destination_id, partial=True, quantity=quantity, remaining=record.quantity)  # type: ignore[arg-type]

    async def _restore_quantity(self, record: InventoryRecord, quantity: int) -> None:
        store = await self._get_inventory_store()
        try:
            record.quantity = quantity
            await store.update_record(record)
            logger.info("source_quantity_restored", inventory_id=record.id, quantity=quantity)
        except Exception as e:
            logger.error(
                "source_quantity_restore_failed",
                inventory_id=record.id,
                quantity=quantity,
                error=str(e),
            )

    def build_transaction(
        self,
        ctx: OperationContext,
        before: InventoryRecord,
        transaction_type: TransactionType,
        action: str,
        quantity: int,
        **fields: Any,
    ) -> TransactionRecord:
        """Transaction prefilled from the record's state before the change."""
        refs = ctx.refs
        values: dict[str, Any] = {
            "inventory_id": before.id,
            "transaction_type": transaction_type,
            "action": action,
            "item_type_name": refs.item_type_name(before.item_type_id),
            "quantity": quantity,
            "from_location_name": refs.location_name(before.location_id),
            "old_status_name": refs.status_name(before.status_id),
            "old_crew_name": refs.crew_name(before.assigned_crew_id),
            "old_area_name": refs.area_name(before.area_id),
        }
        values.update(fields)
        return TransactionRecord(**values)

    async def log_transaction(self, transaction: TransactionRecord) -> None:
        transaction_logger = await self._get_transaction_logger()
        await transaction_logger.log(transaction)

    def to_response(self, result: OperationResult) -> OperationResponse:
        """Convert result to API response."""
        consolidation = None
        if result.consolidation is not None:
            consolidation = ConsolidationResponse(
                consolidated=result.consolidation.consolidated,
                deleted=result.consolidation.deleted,
                failed_groups=result.consolidation.failed_groups,
            )
        return OperationResponse(
            operation=result.operation,
            strategy=result.strategy,
            summary=result.summary,
            succeeded=result.succeeded,
            failed=result.failed,
            results=[ItemResultResponse(**asdict(item)) for item in result.items],
            consolidation=consolidation,
        )
