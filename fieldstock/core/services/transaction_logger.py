"""
Transaction history logger.

Appends audit entries for completed operations. Logging is fire-and-forget:
a failure here never turns a successful inventory change into a failure.
"""

from fieldstock.config import get_logger
from fieldstock.core.entities.transaction import SequentialRecord, TransactionRecord
from fieldstock.core.exceptions import EdgeFunctionError
from fieldstock.core.interfaces.edge_functions import IEdgeFunctionClient
from fieldstock.core.interfaces.transaction_store import ITransactionStore

logger = get_logger(__name__)

LOG_TRANSACTION_FUNCTION = "log-transaction"


class TransactionLogger:
    """Write transactions via the edge function when enabled, else directly."""

    def __init__(
        self,
        transaction_store: ITransactionStore,
        edge_client: IEdgeFunctionClient | None = None,
        user_name: str | None = None,
    ):
        self._store = transaction_store
        self._edge = edge_client
        self._user_name = user_name

    async def log(self, transaction: TransactionRecord) -> TransactionRecord | None:
        """Append a transaction; returns None if it could not be recorded."""
        if transaction.user_name is None:
            transaction.user_name = self._user_name

        if self._edge is not None and self._edge.enabled:
            try:
                await self._edge.invoke(
                    LOG_TRANSACTION_FUNCTION,
                    {"transaction": transaction.model_dump(mode="json", exclude={"id"})},
                )
                logger.info(
                    "transaction_logged_remote",
                    inventory_id=transaction.inventory_id,
                    type=transaction.transaction_type.value,
                )
                return transaction
            except EdgeFunctionError as e:
                logger.warning("transaction_remote_failed_fallback", error=e.message)

        try:
            return await self._store.add_transaction(transaction)
        except Exception as e:
            logger.error(
                "transaction_log_failed",
                inventory_id=transaction.inventory_id,
                type=transaction.transaction_type.value,
                action=transaction.action,
                error=str(e),
            )
            return None

    async def log_sequential(self, sequential: SequentialRecord) -> SequentialRecord | None:
        """Append a sequential footage record; failures are logged only."""
        try:
            return await self._store.add_sequential(sequential)
        except Exception as e:
            logger.error(
                "sequential_log_failed",
                inventory_id=sequential.inventory_id,
                sequential_number=sequential.sequential_number,
                error=str(e),
            )
            return None
