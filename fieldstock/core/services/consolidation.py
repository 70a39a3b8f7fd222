"""
Consolidation pass for bulk inventory.

Collapses every equivalence group in a SLOC to a single record holding the
summed quantity. The lowest ID survives.
"""

from dataclasses import dataclass
from datetime import datetime

from fieldstock.config import get_logger
from fieldstock.core.exceptions import PersistenceError
from fieldstock.core.interfaces.inventory_store import IInventoryStore
from fieldstock.core.result import Err, Ok, Result
from fieldstock.core.services.equivalence import group_bulk_records

logger = get_logger(__name__)


@dataclass
class ConsolidationSummary:
    """Counts of what a pass changed."""

    consolidated: int = 0  # groups collapsed
    deleted: int = 0  # duplicate records removed
    failed_groups: int = 0


class BulkConsolidator:
    """Merge duplicate bulk records within one SLOC."""

    def __init__(self, inventory_store: IInventoryStore):
        self._store = inventory_store

    async def consolidate(self, sloc_id: int) -> Result[ConsolidationSummary]:
        """
        Run one consolidation pass over ``sloc_id``.

        A group whose writes fail is logged and skipped; the pass continues and
        reports only what succeeded. Re-running is safe.
        """
        try:
            records = await self._store.list_bulk_by_sloc(sloc_id)
        except Exception as e:
            logger.error("consolidation_fetch_failed", sloc_id=sloc_id, error=str(e))
            return Err(PersistenceError("consolidation fetch", str(e)))

        summary = ConsolidationSummary()
        groups = group_bulk_records(records)

        for key, members in groups.items():
            if len(members) < 2:
                continue

            members = sorted(members, key=lambda r: r.id or 0)
            survivor, duplicates = members[0], members[1:]
            total = sum(member.quantity or 0 for member in members)

            try:
                survivor.quantity = total
                survivor.updated_at = datetime.utcnow()
                await self._store.update_record(survivor)
            except Exception as e:
                summary.failed_groups += 1
                logger.warning(
                    "consolidation_group_failed",
                    sloc_id=sloc_id,
                    key=key,
                    survivor_id=survivor.id,
                    error=str(e),
                )
                continue

            stranded = 0
            failed_deletes = 0
            for duplicate in duplicates:
                try:
                    await self._store.delete_record(duplicate.id)  # type: ignore[arg-type]
                    summary.deleted += 1
                except Exception as e:
                    failed_deletes += 1
                    stranded += duplicate.quantity or 0
                    logger.warning(
                        "consolidation_delete_failed",
                        sloc_id=sloc_id,
                        key=key,
                        inventory_id=duplicate.id,
                        error=str(e),
                    )

            if failed_deletes:
                # Undeleted duplicates still hold their units; take them back off the survivor
                summary.failed_groups += 1
                try:
                    survivor.quantity = total - stranded
                    await self._store.update_record(survivor)
                except Exception as e:
                    logger.error(
                        "consolidation_compensation_failed",
                        sloc_id=sloc_id,
                        survivor_id=survivor.id,
                        overcount=stranded,
                        error=str(e),
                    )
                continue

            summary.consolidated += 1
            logger.info(
                "consolidation_group_merged",
                sloc_id=sloc_id,
                key=key,
                survivor_id=survivor.id,
                quantity=total,
                merged=len(duplicates),
            )

        logger.info(
            "consolidation_complete",
            sloc_id=sloc_id,
            consolidated=summary.consolidated,
            deleted=summary.deleted,
            failed_groups=summary.failed_groups,
        )
        return Ok(summary)
