"""Receive Inventory Use Case: add vendor deliveries at the receiving location."""

from typing import Any

from fieldstock.application.dto.requests import ReceiveInventoryRequest, ReceiveItem
from fieldstock.application.use_cases.base import (
    InventoryOperationUseCase,
    ItemResult,
    OperationContext,
)
from fieldstock.config import get_logger
from fieldstock.core.entities.inventory import BulkTarget, InventoryRecord
from fieldstock.core.entities.transaction import TransactionRecord, TransactionType
from fieldstock.core.exceptions import ValidationError
from fieldstock.core.services.upsert_engine import UpsertOperation

logger = get_logger(__name__)


class ReceiveInventoryUseCase(InventoryOperationUseCase):
    """Receive bulk quantities (merged into the receiving group) and serialized units."""

    operation_name = "receive"
    function_name = "receive-bulk-inventory"

    def record_ids(self, request: ReceiveInventoryRequest) -> list[int]:
        return []

    def resolve_references(self, request: ReceiveInventoryRequest, ctx: OperationContext) -> None:
        self.require_receiving_status(ctx)
        self.require_receiving_location(ctx)
        ctx.touched_slocs.add(request.sloc_id)

    def _target(self, item: ReceiveItem, request: ReceiveInventoryRequest, ctx: OperationContext) -> BulkTarget:
        return BulkTarget(
            location_id=ctx.targets["location:receiving"].id,
            item_type_id=item.item_type_id,
            status_id=ctx.targets["status:receiving"].id,
            sloc_id=request.sloc_id,
        )

    async def process_item(
        self,
        item: ReceiveItem,
        request: ReceiveInventoryRequest,
        ctx: OperationContext,
    ) -> ItemResult:
        target = self._target(item, request, ctx)

        if item.mfgrsn or item.tilsonsn:
            if item.quantity != 1:
                raise ValidationError("quantity", "serialized units are received one at a time", item.quantity)
            store = await self._get_inventory_store()
            record = await store.create_record(
                InventoryRecord(quantity=1, mfgrsn=item.mfgrsn, tilsonsn=item.tilsonsn, **target.model_dump())
            )
            inventory_id = record.id
            operation = UpsertOperation.CREATED
            new_quantity = 1
        else:
            upserter = await self._get_upserter()
            outcome = (await upserter.add(target, item.quantity)).unwrap()
            inventory_id = outcome.inventory_id
            operation = outcome.operation
            new_quantity = outcome.new_quantity

        refs = ctx.refs
        created = operation is UpsertOperation.CREATED
        await self.log_transaction(
            TransactionRecord(
                inventory_id=inventory_id,
                transaction_type=TransactionType.RECEIVE,
                action="Receive from Vendor",
                item_type_name=refs.item_type_name(item.item_type_id),
                quantity=item.quantity,
                to_location_name=refs.location_name(target.location_id),
                status_name=refs.status_name(target.status_id),
                notes=request.notes
                or ("Received: New record" if created else "Received: Updated existing"),
            )
        )

        logger.info(
            "inventory_received",
            inventory_id=inventory_id,
            item_type_id=item.item_type_id,
            quantity=item.quantity,
            created=created,
        )
        return ItemResult(
            success=True,
            inventory_id=inventory_id,
            operation=operation.value,
            quantity=new_quantity,
        )

    def remote_payload(self, request: ReceiveInventoryRequest, ctx: OperationContext) -> dict[str, Any]:
        return {
            "operation": "add",
            "sloc_id": request.sloc_id,
            "location_id": ctx.targets["location:receiving"].id,
            "status_id": ctx.targets["status:receiving"].id,
            "items": [item.model_dump() for item in request.items],
            "notes": request.notes,
        }
