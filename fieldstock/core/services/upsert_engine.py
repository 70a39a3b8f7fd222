"""
Quantity upsert engine for bulk inventory.

Applies a signed quantity delta to an equivalence group, creating, updating
or deleting one record. A subtract that only the group as a whole can cover
first merges duplicate members into the lowest-id record.
"""

from dataclasses import dataclass
from enum import Enum

from fieldstock.config import get_logger
from fieldstock.core.entities.inventory import BulkTarget, InventoryRecord
from fieldstock.core.exceptions import (
    FieldStockError,
    InsufficientQuantityError,
    PersistenceError,
    RecordNotFoundError,
    ValidationError,
)
from fieldstock.core.interfaces.inventory_store import IInventoryStore
from fieldstock.core.result import Err, Ok, Result
from fieldstock.core.services.equivalence import key_of

logger = get_logger(__name__)


class UpsertMode(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"


class UpsertOperation(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"  # subtract reached zero


@dataclass
class UpsertOutcome:
    """What the upsert did to the group."""

    inventory_id: int
    operation: UpsertOperation
    new_quantity: int


class BulkQuantityUpserter:
    """Find-or-create a bulk group record and commit a quantity delta."""

    def __init__(self, inventory_store: IInventoryStore):
        self._store = inventory_store

    async def add(self, target: BulkTarget, delta: int) -> Result[UpsertOutcome]:
        return await self.upsert(target, delta, UpsertMode.ADD)

    async def subtract(self, target: BulkTarget, delta: int) -> Result[UpsertOutcome]:
        return await self.upsert(target, delta, UpsertMode.SUBTRACT)

    async def upsert(
        self,
        target: BulkTarget,
        delta: int,
        mode: UpsertMode | str,
    ) -> Result[UpsertOutcome]:
        """
        Apply ``delta`` to the group identified by ``target``.

        Args:
            target: Equivalence key plus owning SLOC
            delta: Positive whole quantity
            mode: ``add`` or ``subtract``

        Returns:
            Ok(UpsertOutcome) or Err with InsufficientQuantityError,
            RecordNotFoundError, ValidationError or PersistenceError
        """
        try:
            mode = UpsertMode(mode)
        except ValueError:
            return Err(ValidationError("mode", "must be 'add' or 'subtract'", mode))

        if isinstance(delta, bool) or not isinstance(delta, int) or delta <= 0:
            return Err(ValidationError("quantity", "must be a positive whole number", delta))

        try:
            matches = await self._store.find_bulk(target)
            existing = matches[0] if matches else None

            if mode is UpsertMode.ADD:
                outcome = await self._add(target, existing, delta)
            else:
                group_total = sum(record.quantity for record in matches)
                if existing is not None and existing.quantity < delta <= group_total:
                    existing = await self._fold(target, matches)
                outcome = await self._subtract(target, existing, delta)

        except FieldStockError as e:
            logger.warning(
                "bulk_upsert_failed",
                key=key_of(target),
                sloc_id=target.sloc_id,
                mode=mode.value,
                delta=delta,
                error=e.message,
            )
            return Err(e)
        except Exception as e:
            logger.error(
                "bulk_upsert_persistence_failed",
                key=key_of(target),
                sloc_id=target.sloc_id,
                mode=mode.value,
                error=str(e),
            )
            return Err(PersistenceError(f"bulk {mode.value}", str(e)))

        return Ok(outcome)

    async def _add(
        self,
        target: BulkTarget,
        existing: InventoryRecord | None,
        delta: int,
    ) -> UpsertOutcome:
        if existing is None:
            record = await self._store.create_record(
                InventoryRecord(quantity=delta, **target.model_dump())
            )
            logger.info(
                "bulk_upsert_created",
                inventory_id=record.id,
                key=key_of(target),
                quantity=delta,
            )
            return UpsertOutcome(record.id, UpsertOperation.CREATED, delta)  # type: ignore[arg-type]

        existing.quantity += delta
        await self._store.update_record(existing)
        logger.info(
            "bulk_upsert_updated",
            inventory_id=existing.id,
            key=key_of(target),
            new_quantity=existing.quantity,
        )
        return UpsertOutcome(existing.id, UpsertOperation.UPDATED, existing.quantity)  # type: ignore[arg-type]

    async def _fold(self, target: BulkTarget, matches: list[InventoryRecord]) -> InventoryRecord:
        """Merge duplicate group members into the lowest-id record."""
        survivor, duplicates = matches[0], matches[1:]
        merged = sum(record.quantity for record in duplicates)
        survivor.quantity += merged
        await self._store.update_record(survivor)

        for position, duplicate in enumerate(duplicates):
            try:
                await self._store.delete_record(duplicate.id)  # type: ignore[arg-type]
            except Exception:
                survivor.quantity -= sum(record.quantity for record in duplicates[position:])
                await self._store.update_record(survivor)
                raise

        logger.info(
            "bulk_upsert_group_folded",
            inventory_id=survivor.id,
            key=key_of(target),
            merged=len(duplicates),
            new_quantity=survivor.quantity,
        )
        return survivor

    async def _subtract(
        self,
        target: BulkTarget,
        existing: InventoryRecord | None,
        delta: int,
    ) -> UpsertOutcome:
        if existing is None:
            raise RecordNotFoundError(
                "no bulk record in the source group",
                details={"key": list(key_of(target)), "sloc_id": target.sloc_id},
            )

        new_quantity = existing.quantity - delta
        if new_quantity < 0:
            raise InsufficientQuantityError(existing.quantity, delta, existing.id)

        if new_quantity == 0:
            await self._store.delete_record(existing.id)  # type: ignore[arg-type]
            logger.info("bulk_upsert_deleted", inventory_id=existing.id, key=key_of(target))
            return UpsertOutcome(existing.id, UpsertOperation.DELETED, 0)  # type: ignore[arg-type]

        existing.quantity = new_quantity
        await self._store.update_record(existing)
        logger.info(
            "bulk_upsert_updated",
            inventory_id=existing.id,
            key=key_of(target),
            new_quantity=new_quantity,
        )
        return UpsertOutcome(existing.id, UpsertOperation.UPDATED, new_quantity)  # type: ignore[arg-type]
