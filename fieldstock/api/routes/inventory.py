"""Inventory operation endpoints."""

from fastapi import APIRouter, Depends, status

from fieldstock.api.dependencies import (
    get_adjust_use_case,
    get_consolidate_use_case,
    get_field_install_use_case,
    get_inspect_use_case,
    get_inv_store,
    get_issue_use_case,
    get_receive_use_case,
    get_reference_snapshot,
    get_reject_use_case,
    get_remove_use_case,
    get_return_use_case,
    get_txn_store,
    get_upsert_bulk_use_case,
)
from fieldstock.application.dto.requests import (
    AdjustInventoryRequest,
    FieldInstallRequest,
    InspectInventoryRequest,
    IssueInventoryRequest,
    ReceiveInventoryRequest,
    RejectInventoryRequest,
    RemoveInventoryRequest,
    ReturnInventoryRequest,
    UpsertBulkRequest,
)
from fieldstock.application.dto.responses import (
    ConsolidationResponse,
    ErrorResponse,
    InventoryListResponse,
    InventoryRecordResponse,
    OperationResponse,
    TransactionListResponse,
    TransactionResponse,
    UpsertBulkResponse,
)
from fieldstock.application.use_cases import (
    AdjustInventoryUseCase,
    ConsolidateInventoryUseCase,
    FieldInstallInventoryUseCase,
    InspectInventoryUseCase,
    IssueInventoryUseCase,
    ReceiveInventoryUseCase,
    RejectInventoryUseCase,
    RemoveInventoryUseCase,
    ReturnInventoryUseCase,
    UpsertBulkInventoryUseCase,
)
from fieldstock.core.entities.reference import ReferenceSnapshot
from fieldstock.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteTransactionStore,
)

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

OPERATION_ERRORS = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@router.post(
    "/receive",
    response_model=OperationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=OPERATION_ERRORS,
)
async def receive_inventory(
    request: ReceiveInventoryRequest,
    refs: ReferenceSnapshot = Depends(get_reference_snapshot),
    use_case: ReceiveInventoryUseCase = Depends(get_receive_use_case),
) -> OperationResponse:
    """Receive items into the receiving location."""
    result = await use_case.execute(request, refs)
    return use_case.to_response(result)


@router.post("/issue", response_model=OperationResponse, responses=OPERATION_ERRORS)
async def issue_inventory(
    request: IssueInventoryRequest,
    refs: ReferenceSnapshot = Depends(get_reference_snapshot),
    use_case: IssueInventoryUseCase = Depends(get_issue_use_case),
) -> OperationResponse:
    """Issue items to a crew and area."""
    result = await use_case.execute(request, refs)
    return use_case.to_response(result)


@router.post("/return", response_model=OperationResponse, responses=OPERATION_ERRORS)
async def return_inventory(
    request: ReturnInventoryRequest,
    refs: ReferenceSnapshot = Depends(get_reference_snapshot),
    use_case: ReturnInventoryUseCase = Depends(get_return_use_case),
) -> OperationResponse:
    """Return items to receiving as Available."""
    result = await use_case.execute(request, refs)
    return use_case.to_response(result)


@router.post("/reject", response_model=OperationResponse, responses=OPERATION_ERRORS)
async def reject_inventory(
    request: RejectInventoryRequest,
    refs: ReferenceSnapshot = Depends(get_reference_snapshot),
    use_case: RejectInventoryUseCase = Depends(get_reject_use_case),
) -> OperationResponse:
    """Mark items as Rejected."""
    result = await use_case.execute(request, refs)
    return use_case.to_response(result)


@router.post("/inspect", response_model=OperationResponse, responses=OPERATION_ERRORS)
async def inspect_inventory(
    request: InspectInventoryRequest,
    refs: ReferenceSnapshot = Depends(get_reference_snapshot),
    use_case: InspectInventoryUseCase = Depends(get_inspect_use_case),
) -> OperationResponse:
    """Split items into passed and rejected portions."""
    result = await use_case.execute(request, refs)
    return use_case.to_response(result)


@router.post("/field-install", response_model=OperationResponse, responses=OPERATION_ERRORS)
async def field_install_inventory(
    request: FieldInstallRequest,
    refs: ReferenceSnapshot = Depends(get_reference_snapshot),
    use_case: FieldInstallInventoryUseCase = Depends(get_field_install_use_case),
) -> OperationResponse:
    """Install items in the field."""
    result = await use_case.execute(request, refs)
    return use_case.to_response(result)


@router.post("/remove", response_model=OperationResponse, responses=OPERATION_ERRORS)
async def remove_inventory(
    request: RemoveInventoryRequest,
    refs: ReferenceSnapshot = Depends(get_reference_snapshot),
    use_case: RemoveInventoryUseCase = Depends(get_remove_use_case),
) -> OperationResponse:
    """Retire records to an outgoing location."""
    result = await use_case.execute(request, refs)
    return use_case.to_response(result)


@router.post("/adjust", response_model=OperationResponse, responses=OPERATION_ERRORS)
async def adjust_inventory(
    request: AdjustInventoryRequest,
    refs: ReferenceSnapshot = Depends(get_reference_snapshot),
    use_case: AdjustInventoryUseCase = Depends(get_adjust_use_case),
) -> OperationResponse:
    """Correct record quantities."""
    result = await use_case.execute(request, refs)
    return use_case.to_response(result)


@router.post(
    "/consolidate/{sloc_id}",
    response_model=ConsolidationResponse,
    responses={500: {"model": ErrorResponse}},
)
async def consolidate_inventory(
    sloc_id: int,
    use_case: ConsolidateInventoryUseCase = Depends(get_consolidate_use_case),
) -> ConsolidationResponse:
    """Collapse duplicate bulk records in a SLOC."""
    summary = await use_case.execute(sloc_id)
    return use_case.to_response(summary)


@router.post(
    "/upsert",
    response_model=UpsertBulkResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def upsert_bulk_inventory(
    request: UpsertBulkRequest,
    use_case: UpsertBulkInventoryUseCase = Depends(get_upsert_bulk_use_case),
) -> UpsertBulkResponse:
    """Add to or subtract from one equivalence group."""
    outcome = await use_case.execute(request)
    return use_case.to_response(outcome)


@router.get("/sloc/{sloc_id}", response_model=InventoryListResponse)
async def list_sloc_inventory(
    sloc_id: int,
    store: SQLiteInventoryStore = Depends(get_inv_store),
) -> InventoryListResponse:
    """List every record in a SLOC."""
    records = await store.list_by_sloc(sloc_id)
    return InventoryListResponse(
        sloc_id=sloc_id,
        records=[
            InventoryRecordResponse(**record.model_dump())  # type: ignore[arg-type]
            for record in records
        ],
        total_quantity=sum(record.quantity for record in records),
    )


@router.get("/transactions", response_model=TransactionListResponse)
async def list_transactions(
    inventory_id: int | None = None,
    limit: int = 100,
    offset: int = 0,
    store: SQLiteTransactionStore = Depends(get_txn_store),
) -> TransactionListResponse:
    """Transaction history, newest first."""
    transactions = await store.list_transactions(inventory_id=inventory_id, limit=limit, offset=offset)
    return TransactionListResponse(
        transactions=[
            TransactionResponse(
                **transaction.model_dump(exclude={"transaction_type"}),
                transaction_type=transaction.transaction_type.value,
            )
            for transaction in transactions
        ],
        total=len(transactions),
    )
