"""Remove Inventory Use Case: retire records to an outgoing location."""

from collections.abc import Sequence
from typing import Any

from fieldstock.application.dto.requests import QuantityItem, RemoveInventoryRequest
from fieldstock.application.use_cases.base import (
    InventoryOperationUseCase,
    ItemResult,
    OperationContext,
)
from fieldstock.core.entities.transaction import TransactionType
from fieldstock.core.exceptions import RequiredReferenceMissingError


class RemoveInventoryUseCase(InventoryOperationUseCase):
    """Whole records move to the outgoing location with status Removed."""

    operation_name = "remove"
    function_name = "remove-inventory"

    def request_items(self, request: RemoveInventoryRequest) -> Sequence[QuantityItem]:
        return [QuantityItem(inventory_id=inventory_id) for inventory_id in request.inventory_ids]

    def resolve_references(self, request: RemoveInventoryRequest, ctx: OperationContext) -> None:
        location = ctx.refs.locations.get(request.outgoing_location_id)
        if location is None:
            raise RequiredReferenceMissingError("location", f"Outgoing ({request.outgoing_location_id})")
        ctx.targets["location:outgoing"] = location
        self.require_status(ctx, self.settings.removed_status)

    async def process_item(
        self,
        item: QuantityItem,
        request: RemoveInventoryRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        record = await self.record_for(ctx, item.inventory_id)
        before = record.model_copy()
        location_id = ctx.targets["location:outgoing"].id
        status_id = ctx.targets[f"status:{self.settings.removed_status}"].id

        await self.update_in_place(record, ctx, location_id=location_id, status_id=status_id)
        await self.log_transaction(
            self.build_transaction(
                ctx,
                before,
                TransactionType.REMOVE,
                "Remove",
                record.quantity,
                to_location_name=ctx.refs.location_name(location_id),
                status_name=ctx.refs.status_name(status_id),
                notes=request.notes,
            )
        )
        return ItemResult(success=True, inventory_id=record.id, operation="updated", quantity=record.quantity)

    def remote_payload(self, request: RemoveInventoryRequest, ctx: OperationContext) -> dict[str, Any]:
        return {
            "inventory_ids": request.inventory_ids,
            "outgoing_location_id": ctx.targets["location:outgoing"].id,
            "removed_status_id": ctx.targets[f"status:{self.settings.removed_status}"].id,
            "notes": request.notes or "",
        }
