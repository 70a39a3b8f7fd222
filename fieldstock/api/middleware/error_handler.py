"""
Error responses for the inventory API.

Every error body has the ``ErrorResponse`` shape. The HTTP status comes from
the exception type, the hint from the error code, and ``details`` carries the
domain error's structured context (for an insufficient quantity: available,
requested and the inventory id).
"""

import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from fieldstock.application.dto.responses import ErrorResponse
from fieldstock.config import get_logger
from fieldstock.core.exceptions import (
    CircuitBreakerOpenError,
    ConfigurationError,
    EdgeFunctionError,
    FieldStockError,
    InsufficientQuantityError,
    RecordNotFoundError,
    RequiredReferenceMissingError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)

# First match wins, so subclasses precede their bases
STATUS_BY_TYPE: tuple[tuple[type[FieldStockError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (RecordNotFoundError, status.HTTP_404_NOT_FOUND),
    (InsufficientQuantityError, status.HTTP_409_CONFLICT),
    (RequiredReferenceMissingError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (CircuitBreakerOpenError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (EdgeFunctionError, status.HTTP_502_BAD_GATEWAY),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)

HINTS: dict[str, str] = {
    "INSUFFICIENT_QUANTITY": "Reduce the quantity or check GET /api/inventory/sloc/{sloc_id} for what is on hand.",
    "RECORD_NOT_FOUND": "Check the inventory ID or the equivalence group attributes.",
    "REQUIRED_REFERENCE_MISSING": "Create the missing status, location or config value before retrying.",
    "PERSISTENCE_ERROR": "A database operation failed. Check server logs.",
    "EDGE_FUNCTION_ERROR": "The edge function failed and no local fallback was available.",
    "EDGE_FUNCTION_UNAVAILABLE": "Edge functions are disabled. Enable EDGE_ENABLED or use local processing.",
    "CIRCUIT_BREAKER_OPEN": "Too many edge function failures. Wait for cooldown before retrying.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with current inventory state.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    502: "An upstream service failed. Retry later.",
    503: "The service is temporarily unavailable. Retry later.",
}


def status_for(exc: Exception) -> int:
    for exc_type, code in STATUS_BY_TYPE:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=HINTS.get(error_code) or STATUS_HINTS.get(status_code, ""),
        details=details or {},
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last-resort conversion of exceptions no handler claimed."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            status_code = status_for(e)
            error_code = e.code if isinstance(e, FieldStockError) else "INTERNAL_ERROR"
            logger.error(
                "unhandled_exception",
                request_id=getattr(request.state, "request_id", None),
                path=request.url.path,
                error_code=error_code,
                error=str(e),
                traceback=traceback.format_exc(),
            )
            details = e.details if isinstance(e, FieldStockError) else None
            return error_response(request, status_code, error_code, str(e), details)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain, validation and HTTP errors."""

    @app.exception_handler(FieldStockError)
    async def fieldstock_exception_handler(request: Request, exc: FieldStockError) -> JSONResponse:
        status_code = status_for(exc)
        log = logger.error if status_code >= 500 else logger.warning
        log("request_rejected", path=request.url.path, error_code=exc.code, error=exc.message)
        return error_response(request, status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
            for error in exc.errors()
        ]
        return error_response(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            {"errors": errors},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        error_code = {400: "BAD_REQUEST", 404: "NOT_FOUND", 422: "UNPROCESSABLE_ENTITY"}.get(
            exc.status_code, "HTTP_ERROR"
        )
        return error_response(request, exc.status_code, error_code, str(exc.detail or "An error occurred"))
