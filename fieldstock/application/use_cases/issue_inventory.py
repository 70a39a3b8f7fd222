"""Issue Inventory Use Case: hand stock to a crew for an area."""

from typing import Any

from fieldstock.application.dto.requests import IssueInventoryRequest, IssueItem
from fieldstock.application.use_cases.base import (
    InventoryOperationUseCase,
    ItemResult,
    OperationContext,
)
from fieldstock.config import get_logger
from fieldstock.core.entities.inventory import BulkTarget, InventoryRecord
from fieldstock.core.entities.transaction import TransactionRecord, TransactionType
from fieldstock.core.exceptions import ValidationError
from fieldstock.core.services.equivalence import key_of

logger = get_logger(__name__)

SERIALIZED_FUNCTION = "issue-serialized-inventory"


class IssueInventoryUseCase(InventoryOperationUseCase):
    """
    Issue serialized units in place and bulk quantities by split.

    Bulk lines may name a record (partial issue leaves the remainder in the
    source group) or an item type, in which case the quantity is drawn from
    the Available group at the receiving location.
    """

    operation_name = "issue"
    function_name = "bulk-issue-inventory"

    def resolve_references(self, request: IssueInventoryRequest, ctx: OperationContext) -> None:
        self.require_location(ctx, self.settings.with_crew_location)
        self.require_status(ctx, self.settings.issued_status)

        if any(item.inventory_id is None for item in request.items):
            if request.sloc_id is None:
                raise ValidationError("sloc_id", "required when issuing by item type")
            self.require_receiving_location(ctx)
            self.require_status(ctx, self.settings.available_status)
            ctx.touched_slocs.add(request.sloc_id)

    def _destination(self, request: IssueInventoryRequest, ctx: OperationContext) -> dict[str, Any]:
        return {
            "location_id": ctx.targets[f"location:{self.settings.with_crew_location}"].id,
            "status_id": ctx.targets[f"status:{self.settings.issued_status}"].id,
            "assigned_crew_id": request.crew_id,
            "area_id": request.area_id,
        }

    def _crew_area(self, request: IssueInventoryRequest, ctx: OperationContext) -> str:
        crew = ctx.refs.crew_name(request.crew_id) or "Unknown"
        area = ctx.refs.area_name(request.area_id) or "No Area"
        return f"{crew} - {area}"

    async def process_item(
        self,
        item: IssueItem,
        request: IssueInventoryRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        if item.inventory_id is None:
            return await self._issue_from_group(item, request, ctx)

        record = await self.record_for(ctx, item.inventory_id)
        before = record.model_copy()
        destination = self._destination(request, ctx)

        if self.is_serialized_item(record, ctx.refs):
            await self.update_in_place(record, ctx, **destination)
            inventory_id, quantity, notes = record.id, record.quantity, request.notes
            operation = "updated"
        else:
            quantity = item.quantity or record.quantity
            moved = await self.split_or_move(record, quantity, ctx, **destination)
            inventory_id = moved.inventory_id
            operation = "split" if moved.partial else "updated"
            if moved.partial:
                notes = f"Partial issue ({quantity} of {before.quantity}) to {self._crew_area(request, ctx)}"
            else:
                notes = f"Issued to {self._crew_area(request, ctx)}"
            notes = request.notes or notes

        await self.log_transaction(
            self.build_transaction(
                ctx,
                before,
                TransactionType.ISSUE,
                "Issue to Crew",
                quantity,
                inventory_id=inventory_id,
                to_location_name=ctx.refs.location_name(destination["location_id"]),
                status_name=ctx.refs.status_name(destination["status_id"]),
                assigned_crew_name=ctx.refs.crew_name(request.crew_id),
                area_name=ctx.refs.area_name(request.area_id),
                notes=notes,
            )
        )
        return ItemResult(success=True, inventory_id=inventory_id, operation=operation, quantity=quantity)

    async def _issue_from_group(
        self,
        item: IssueItem,
        request: IssueInventoryRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        """Subtract from the receiving group, then add to the crew's group."""
        source = BulkTarget(
            location_id=ctx.targets["location:receiving"].id,
            item_type_id=item.item_type_id,  # type: ignore[arg-type]
            status_id=ctx.targets[f"status:{self.settings.available_status}"].id,
            sloc_id=request.sloc_id,  # type: ignore[arg-type]
        )
        destination = source.model_copy(update=self._destination(request, ctx))
        quantity: int = item.quantity  # type: ignore[assignment]

        upserter = await self._get_upserter()
        taken = (await upserter.subtract(source, quantity)).unwrap()
        added = await upserter.add(destination, quantity)
        if not added.is_ok:
            restored = await upserter.add(source, quantity)
            if not restored.is_ok:
                logger.error(
                    "issue_source_restore_failed",
                    key=key_of(source),
                    sloc_id=source.sloc_id,
                    quantity=quantity,
                )
            added.unwrap()
        outcome = added.unwrap()

        await self.log_transaction(
            TransactionRecord(
                inventory_id=outcome.inventory_id,
                transaction_type=TransactionType.ISSUE,
                action="Issue to Crew",
                item_type_name=ctx.refs.item_type_name(source.item_type_id),
                quantity=quantity,
                from_location_name=ctx.refs.location_name(source.location_id),
                to_location_name=ctx.refs.location_name(destination.location_id),
                old_status_name=ctx.refs.status_name(source.status_id),
                status_name=ctx.refs.status_name(destination.status_id),
                assigned_crew_name=ctx.refs.crew_name(request.crew_id),
                area_name=ctx.refs.area_name(request.area_id),
                notes=request.notes
                or f"Issued {quantity} to {self._crew_area(request, ctx)} ({taken.new_quantity} left)",
            )
        )
        return ItemResult(
            success=True,
            inventory_id=outcome.inventory_id,
            operation=outcome.operation.value,
            quantity=quantity,
            details={"source_inventory_id": taken.inventory_id, "source_quantity": taken.new_quantity},
        )

    def _all_serialized(self, request: IssueInventoryRequest, ctx: OperationContext) -> bool:
        records: list[InventoryRecord | None] = [
            ctx.records.get(item.inventory_id) if item.inventory_id is not None else None
            for item in request.items
        ]
        return all(
            record is not None and self.is_serialized_item(record, ctx.refs) for record in records
        )

    def function_for(self, request: IssueInventoryRequest, ctx: OperationContext) -> str:
        if self._all_serialized(request, ctx):
            return SERIALIZED_FUNCTION
        return self.function_name

    def remote_payload(self, request: IssueInventoryRequest, ctx: OperationContext) -> dict[str, Any]:
        destination = self._destination(request, ctx)
        if self._all_serialized(request, ctx):
            return {
                "inventory_ids": [item.inventory_id for item in request.items],
                "crew_id": request.crew_id,
                "area_id": request.area_id,
                "location_id": destination["location_id"],
                "notes": request.notes or "",
            }
        return {
            "items": [item.model_dump() for item in request.items],
            "sloc_id": request.sloc_id,
            "crew_id": request.crew_id,
            "area_id": request.area_id,
            "target_location_id": destination["location_id"],
            "target_status_id": destination["status_id"],
            "notes": request.notes or "",
        }
