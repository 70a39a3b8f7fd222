"""Adjust Inventory Use Case: absolute quantity corrections."""

from typing import Any

from fieldstock.application.dto.requests import AdjustInventoryRequest, AdjustItem
from fieldstock.application.use_cases.base import (
    InventoryOperationUseCase,
    ItemResult,
    OperationContext,
)
from fieldstock.core.entities.transaction import TransactionType
from fieldstock.core.exceptions import ValidationError


class AdjustInventoryUseCase(InventoryOperationUseCase):
    """Set record quantities; a bulk record adjusted to zero is deleted."""

    operation_name = "adjust"
    function_name = "adjust-inventory"

    async def process_item(
        self,
        item: AdjustItem,
        request: AdjustInventoryRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        if item.new_quantity < 0:
            raise ValidationError("new_quantity", "cannot be negative", item.new_quantity)

        record = await self.record_for(ctx, item.inventory_id)
        serialized = self.is_serialized_item(record, ctx.refs)
        if serialized and item.new_quantity == 0:
            raise ValidationError("new_quantity", "serialized records are removed, not zeroed", 0)
        # Reels carrying footage are the only serialized records above 1
        if serialized and record.quantity == 1 and item.new_quantity != 1:
            raise ValidationError(
                "new_quantity", "a serialized unit always has quantity 1", item.new_quantity
            )

        before = record.model_copy()
        store = await self._get_inventory_store()
        ctx.touched_slocs.add(record.sloc_id)

        if item.new_quantity == 0:
            await store.delete_record(record.id)  # type: ignore[arg-type]
            operation = "deleted"
        else:
            record.quantity = item.new_quantity
            await store.update_record(record)
            operation = "updated"

        await self.log_transaction(
            self.build_transaction(
                ctx,
                before,
                TransactionType.ADJUST,
                "Adjust",
                item.new_quantity,
                old_quantity=before.quantity,
                to_location_name=ctx.refs.location_name(before.location_id),
                status_name=ctx.refs.status_name(before.status_id),
                notes=request.reason,
            )
        )
        return ItemResult(
            success=True,
            inventory_id=record.id,
            operation=operation,
            quantity=item.new_quantity,
            details={"old_quantity": before.quantity},
        )

    def remote_payload(self, request: AdjustInventoryRequest, ctx: OperationContext) -> dict[str, Any]:
        return {
            "items": [item.model_dump() for item in request.items],
            "reason": request.reason or "",
        }
