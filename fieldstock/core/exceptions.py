"""
Domain exceptions for the inventory reconciliation core.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class FieldStockError(Exception):
    """Base exception for all inventory errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Inventory Exceptions
class InventoryError(FieldStockError):
    """Base exception for inventory operations."""

    pass


class InsufficientQuantityError(InventoryError):
    """Requested quantity exceeds what the record or group holds."""

    def __init__(self, available: int, requested: int, inventory_id: int | None = None):
        super().__init__(
            f"Insufficient quantity. Available: {available}, Requested: {requested}",
            code="INSUFFICIENT_QUANTITY",
            details={
                "available": available,
                "requested": requested,
                "inventory_id": inventory_id,
            },
        )


class RecordNotFoundError(InventoryError):
    """Inventory record or equivalence group does not exist."""

    def __init__(self, what: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"Inventory record not found: {what}",
            code="RECORD_NOT_FOUND",
            details=details or {},
        )


class RequiredReferenceMissingError(InventoryError):
    """A status, location or configuration value the operation needs is absent."""

    def __init__(self, kind: str, name: str):
        super().__init__(
            f"{name} {kind} not found",
            code="REQUIRED_REFERENCE_MISSING",
            details={"kind": kind, "name": name},
        )


# Storage Exceptions
class StorageError(FieldStockError):
    """Base exception for storage operations."""

    pass


class PersistenceError(StorageError):
    """Persistence layer operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Persistence error during {operation}: {error}",
            code="PERSISTENCE_ERROR",
            details={"operation": operation, "error": error},
        )


# Edge Function Exceptions
class EdgeFunctionError(FieldStockError):
    """Remote edge function call failed."""

    def __init__(self, function: str, reason: str, status_code: int | None = None):
        super().__init__(
            f"Edge function {function} failed: {reason}",
            code="EDGE_FUNCTION_ERROR",
            details={"function": function, "reason": reason, "status_code": status_code},
        )


class EdgeFunctionUnavailableError(EdgeFunctionError):
    """Edge functions are disabled or not configured."""

    def __init__(self, function: str, reason: str = "edge functions disabled"):
        super().__init__(function, reason)
        self.code = "EDGE_FUNCTION_UNAVAILABLE"


class CircuitBreakerOpenError(EdgeFunctionError):
    """Circuit breaker is open due to repeated failures."""

    def __init__(self, function: str, cooldown_remaining: int):
        super().__init__(function, f"circuit breaker open, retry in {cooldown_remaining}s")
        self.code = "CIRCUIT_BREAKER_OPEN"
        self.details["cooldown_remaining"] = cooldown_remaining


# Validation Exceptions
class ValidationError(FieldStockError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class ConfigurationError(FieldStockError):
    """Configuration error."""

    pass
