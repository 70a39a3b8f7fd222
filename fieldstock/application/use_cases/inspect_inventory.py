"""
Inspect Inventory Use Case.

Each inspected record is divided into passed, rejected and uninspected
portions that always sum to its quantity. The uninspected remainder keeps
the original status; passed units go to Available and rejected units to
Rejected, merging into existing groups.
"""

from typing import Any

from fieldstock.application.dto.requests import InspectInventoryRequest, InspectItem
from fieldstock.application.use_cases.base import (
    InventoryOperationUseCase,
    ItemResult,
    OperationContext,
)
from fieldstock.config import get_logger
from fieldstock.core.entities.inventory import BulkTarget, InventoryRecord
from fieldstock.core.entities.transaction import TransactionType
from fieldstock.core.exceptions import ValidationError
from fieldstock.core.result import Err

logger = get_logger(__name__)


class InspectInventoryUseCase(InventoryOperationUseCase):
    """Split records into passed and rejected portions."""

    operation_name = "inspect"
    function_name = "inspect-inventory"

    def resolve_references(self, request: InspectInventoryRequest, ctx: OperationContext) -> None:
        self.require_status(ctx, self.settings.available_status)
        self.require_status(ctx, self.settings.rejected_status)

    def _status_ids(self, ctx: OperationContext) -> tuple[int, int]:
        return (
            ctx.targets[f"status:{self.settings.available_status}"].id,
            ctx.targets[f"status:{self.settings.rejected_status}"].id,
        )

    def _validate(self, item: InspectItem, record: InventoryRecord, serialized: bool) -> None:
        inspected = item.passed + item.rejected
        if inspected <= 0:
            raise ValidationError("passed", "at least one unit must be passed or rejected", inspected)
        if serialized and inspected != 1:
            raise ValidationError("passed", "a serialized unit is either passed or rejected", inspected)
        if inspected > record.quantity:
            raise ValidationError(
                "passed",
                f"passed + rejected ({inspected}) exceeds available quantity ({record.quantity})",
                inspected,
            )

    async def process_item(
        self,
        item: InspectItem,
        request: InspectInventoryRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        record = await self.record_for(ctx, item.inventory_id)
        serialized = self.is_serialized_item(record, ctx.refs)
        self._validate(item, record, serialized)

        if serialized:
            return await self._inspect_serialized(item, record, request, ctx)
        return await self._inspect_bulk(item, record, request, ctx)

    async def _inspect_serialized(
        self,
        item: InspectItem,
        record: InventoryRecord,
        request: InspectInventoryRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        before = record.model_copy()
        available_id, rejected_id = self._status_ids(ctx)
        passed = item.passed == 1
        status_id = available_id if passed else rejected_id

        await self.update_in_place(record, ctx, status_id=status_id)
        await self.log_transaction(
            self.build_transaction(
                ctx,
                before,
                TransactionType.INSPECT,
                "Inspect - Passed" if passed else "Inspect - Rejected",
                1,
                to_location_name=ctx.refs.location_name(record.location_id),
                status_name=ctx.refs.status_name(status_id),
                assigned_crew_name=ctx.refs.crew_name(record.assigned_crew_id),
                area_name=ctx.refs.area_name(record.area_id),
                notes=request.notes,
            )
        )
        return ItemResult(
            success=True,
            inventory_id=record.id,
            operation="updated",
            quantity=1,
            details={"passed": item.passed, "rejected": item.rejected, "remaining": 0},
        )

    async def _inspect_bulk(
        self,
        item: InspectItem,
        record: InventoryRecord,
        request: InspectInventoryRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        before = record.model_copy()
        available_id, rejected_id = self._status_ids(ctx)
        inspected = item.passed + item.rejected
        remaining = record.quantity - inspected
        store = await self._get_inventory_store()
        upserter = await self._get_upserter()
        ctx.touched_slocs.add(record.sloc_id)

        # Uninspected units stay on the original record
        if remaining == 0:
            await store.delete_record(record.id)  # type: ignore[arg-type]
        else:
            record.quantity = remaining
            await store.update_record(record)

        portions = [
            ("passed", "Inspect - Passed", available_id, item.passed),
            ("rejected", "Inspect - Rejected", rejected_id, item.rejected),
        ]
        applied: list[tuple[BulkTarget, int]] = []
        destinations: dict[str, int] = {}
        try:
            for label, _, status_id, quantity in portions:
                if quantity == 0:
                    continue
                target = BulkTarget.from_record(before, status_id=status_id)
                outcome = (await upserter.add(target, quantity)).unwrap()
                applied.append((target, quantity))
                destinations[label] = outcome.inventory_id
        except Exception:
            await self._undo(before, applied, inspected)
            raise

        for label, action, status_id, quantity in portions:
            if quantity == 0:
                continue
            await self.log_transaction(
                self.build_transaction(
                    ctx,
                    before,
                    TransactionType.INSPECT,
                    action,
                    quantity,
                    inventory_id=destinations[label],
                    old_quantity=before.quantity,
                    to_location_name=ctx.refs.location_name(before.location_id),
                    status_name=ctx.refs.status_name(status_id),
                    assigned_crew_name=ctx.refs.crew_name(before.assigned_crew_id),
                    area_name=ctx.refs.area_name(before.area_id),
                    notes=request.notes
                    or f"{quantity} of {before.quantity} {label} ({remaining} uninspected)",
                )
            )

        logger.info(
            "inventory_inspected",
            inventory_id=before.id,
            passed=item.passed,
            rejected=item.rejected,
            remaining=remaining,
        )
        return ItemResult(
            success=True,
            inventory_id=before.id,
            operation="deleted" if remaining == 0 else "split",
            quantity=inspected,
            details={
                "passed": item.passed,
                "rejected": item.rejected,
                "remaining": remaining,
                "passed_inventory_id": destinations.get("passed"),
                "rejected_inventory_id": destinations.get("rejected"),
            },
        )

    async def _undo(
        self,
        before: InventoryRecord,
        applied: list[tuple[BulkTarget, int]],
        inspected: int,
    ) -> None:
        """Take back applied portions and return the inspected units to the source group."""
        upserter = await self._get_upserter()
        for target, quantity in applied:
            result = await upserter.subtract(target, quantity)
            if isinstance(result, Err):
                logger.error(
                    "inspect_undo_failed",
                    inventory_id=before.id,
                    status_id=target.status_id,
                    quantity=quantity,
                    error=result.error.message,
                )
        result = await upserter.add(BulkTarget.from_record(before), inspected)
        if isinstance(result, Err):
            logger.error(
                "inspect_restore_failed",
                inventory_id=before.id,
                quantity=inspected,
                error=result.error.message,
            )

    def remote_payload(self, request: InspectInventoryRequest, ctx: OperationContext) -> dict[str, Any]:
        available_id, rejected_id = self._status_ids(ctx)
        return {
            "items": [item.model_dump() for item in request.items],
            "available_status_id": available_id,
            "rejected_status_id": rejected_id,
            "notes": request.notes or "",
        }
