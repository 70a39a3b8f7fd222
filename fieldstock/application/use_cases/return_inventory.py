"""Return Inventory Use Case: bring stock back to receiving as Available."""

from typing import Any

from fieldstock.application.dto.requests import QuantityItem, ReturnInventoryRequest
from fieldstock.application.use_cases.base import (
    InventoryOperationUseCase,
    ItemResult,
    OperationContext,
)
from fieldstock.core.entities.transaction import TransactionType


class ReturnInventoryUseCase(InventoryOperationUseCase):
    """Return items from any state; crew and area assignments are cleared."""

    operation_name = "return"
    function_name = "return-inventory"

    def resolve_references(self, request: ReturnInventoryRequest, ctx: OperationContext) -> None:
        self.require_receiving_location(ctx)
        self.require_status(ctx, self.settings.available_status)

    def _destination(self, ctx: OperationContext) -> dict[str, Any]:
        return {
            "location_id": ctx.targets["location:receiving"].id,
            "status_id": ctx.targets[f"status:{self.settings.available_status}"].id,
            "assigned_crew_id": None,
            "area_id": None,
        }

    async def process_item(
        self,
        item: QuantityItem,
        request: ReturnInventoryRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        record = await self.record_for(ctx, item.inventory_id)
        before = record.model_copy()
        destination = self._destination(ctx)

        if self.is_serialized_item(record, ctx.refs) and not item.quantity:
            await self.update_in_place(record, ctx, **destination)
            inventory_id, quantity, partial = record.id, record.quantity, False
        else:
            quantity = item.quantity or record.quantity
            moved = await self.split_or_move(record, quantity, ctx, **destination)
            inventory_id, partial = moved.inventory_id, moved.partial

        if partial:
            notes = f"Partial return ({quantity} of {before.quantity})"
        else:
            notes = "Returned to warehouse"

        await self.log_transaction(
            self.build_transaction(
                ctx,
                before,
                TransactionType.RETURN,
                "Return Material",
                quantity,
                inventory_id=inventory_id,
                to_location_name=ctx.refs.location_name(destination["location_id"]),
                status_name=ctx.refs.status_name(destination["status_id"]),
                notes=request.notes or notes,
            )
        )
        return ItemResult(
            success=True,
            inventory_id=inventory_id,
            operation="split" if partial else "updated",
            quantity=quantity,
        )

    def remote_payload(self, request: ReturnInventoryRequest, ctx: OperationContext) -> dict[str, Any]:
        destination = self._destination(ctx)
        return {
            "items": [item.model_dump() for item in request.items],
            "target_location_id": destination["location_id"],
            "target_status_id": destination["status_id"],
            "notes": request.notes or "",
        }
