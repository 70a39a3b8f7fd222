"""Reject Inventory Use Case."""

from typing import Any

from fieldstock.application.dto.requests import QuantityItem, RejectInventoryRequest
from fieldstock.application.use_cases.base import (
    InventoryOperationUseCase,
    ItemResult,
    OperationContext,
)
from fieldstock.core.entities.transaction import TransactionType


class RejectInventoryUseCase(InventoryOperationUseCase):
    """Set items to Rejected; bulk records split when only part is rejected."""

    operation_name = "reject"
    function_name = "reject-inventory"

    def resolve_references(self, request: RejectInventoryRequest, ctx: OperationContext) -> None:
        self.require_status(ctx, self.settings.rejected_status)

    async def process_item(
        self,
        item: QuantityItem,
        request: RejectInventoryRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        record = await self.record_for(ctx, item.inventory_id)
        before = record.model_copy()
        status_id = ctx.targets[f"status:{self.settings.rejected_status}"].id

        if self.is_serialized_item(record, ctx.refs) and not item.quantity:
            await self.update_in_place(record, ctx, status_id=status_id)
            inventory_id, quantity, partial = record.id, record.quantity, False
        else:
            quantity = item.quantity or record.quantity
            moved = await self.split_or_move(record, quantity, ctx, status_id=status_id)
            inventory_id, partial = moved.inventory_id, moved.partial

        await self.log_transaction(
            self.build_transaction(
                ctx,
                before,
                TransactionType.REJECT,
                "Reject",
                quantity,
                inventory_id=inventory_id,
                to_location_name=ctx.refs.location_name(before.location_id),
                status_name=ctx.refs.status_name(status_id),
                assigned_crew_name=ctx.refs.crew_name(before.assigned_crew_id),
                area_name=ctx.refs.area_name(before.area_id),
                notes=request.comment,
            )
        )
        return ItemResult(
            success=True,
            inventory_id=inventory_id,
            operation="split" if partial else "updated",
            quantity=quantity,
        )

    def remote_payload(self, request: RejectInventoryRequest, ctx: OperationContext) -> dict[str, Any]:
        return {
            "items": [item.model_dump() for item in request.items],
            "rejected_status_id": ctx.targets[f"status:{self.settings.rejected_status}"].id,
            "comment": request.comment or "",
        }
