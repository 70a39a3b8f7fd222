"""Field Install Use Case: move issued stock to Field Installed."""

from typing import Any

from fieldstock.application.dto.requests import FieldInstallItem, FieldInstallRequest
from fieldstock.application.use_cases.base import (
    InventoryOperationUseCase,
    ItemResult,
    OperationContext,
)
from fieldstock.core.entities.transaction import SequentialRecord, TransactionType

VERIFIED_NOTE = "Verified - manually entered during field install"
ESTIMATED_NOTE = "Estimated - calculated from footage during field install"


class FieldInstallInventoryUseCase(InventoryOperationUseCase):
    """
    Install items in the field.

    The crew assignment is kept and the area may be overridden per item.
    Serialized reels installed by footage split like bulk records, keeping
    their serials on both parts. A sequential footage number, when given, is
    recorded as a side entry against the installed record.
    """

    operation_name = "field_install"
    function_name = "field-install-inventory"

    @property
    def consolidates(self) -> bool:  # type: ignore[override]
        return self.settings.consolidate_after_field_install

    def resolve_references(self, request: FieldInstallRequest, ctx: OperationContext) -> None:
        self.require_location(ctx, self.settings.field_installed_location)
        self.require_status(ctx, self.settings.installed_status)

    def _targets(self, ctx: OperationContext) -> tuple[int, int]:
        return (
            ctx.targets[f"location:{self.settings.field_installed_location}"].id,
            ctx.targets[f"status:{self.settings.installed_status}"].id,
        )

    async def process_item(
        self,
        item: FieldInstallItem,
        request: FieldInstallRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        record = await self.record_for(ctx, item.inventory_id)
        before = record.model_copy()
        location_id, status_id = self._targets(ctx)
        destination = {
            "location_id": location_id,
            "status_id": status_id,
            "area_id": item.area_id if item.area_id is not None else record.area_id,
        }

        if self.is_serialized_item(record, ctx.refs) and not item.quantity:
            await self.update_in_place(record, ctx, **destination)
            inventory_id, quantity, partial = record.id, record.quantity, False
        else:
            quantity = item.quantity or record.quantity
            moved = await self.split_or_move(record, quantity, ctx, **destination)
            inventory_id, partial = moved.inventory_id, moved.partial

        if partial:
            notes = f"Partial install ({quantity} of {before.quantity}) to field"
        else:
            notes = "Installed in field"

        await self.log_transaction(
            self.build_transaction(
                ctx,
                before,
                TransactionType.INSTALL,
                "Field Install",
                quantity,
                inventory_id=inventory_id,
                to_location_name=ctx.refs.location_name(location_id),
                status_name=ctx.refs.status_name(status_id),
                assigned_crew_name=ctx.refs.crew_name(before.assigned_crew_id),
                area_name=ctx.refs.area_name(destination["area_id"]),
                notes=request.notes or notes,
            )
        )

        details: dict[str, Any] = {}
        if item.sequential_number is not None:
            transaction_logger = await self._get_transaction_logger()
            sequential = await transaction_logger.log_sequential(
                SequentialRecord(
                    inventory_id=inventory_id,  # type: ignore[arg-type]
                    sequential_number=item.sequential_number,
                    notes=VERIFIED_NOTE if item.sequential_verified else ESTIMATED_NOTE,
                )
            )
            details["sequential_recorded"] = sequential is not None

        return ItemResult(
            success=True,
            inventory_id=inventory_id,
            operation="split" if partial else "updated",
            quantity=quantity,
            details=details,
        )

    def remote_payload(self, request: FieldInstallRequest, ctx: OperationContext) -> dict[str, Any]:
        location_id, status_id = self._targets(ctx)
        return {
            "items": [item.model_dump() for item in request.items],
            "field_installed_location_id": location_id,
            "installed_status_id": status_id,
            "notes": request.notes or "",
        }
