"""Unit tests for domain exceptions."""

import pytest

from fieldstock.core.exceptions import (
    CircuitBreakerOpenError,
    ConfigurationError,
    EdgeFunctionError,
    EdgeFunctionUnavailableError,
    FieldStockError,
    InsufficientQuantityError,
    InventoryError,
    PersistenceError,
    RecordNotFoundError,
    RequiredReferenceMissingError,
    StorageError,
    ValidationError,
)


class TestFieldStockError:
    """Tests for base FieldStockError exception."""

    def test_basic_initialization(self):
        error = FieldStockError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "FieldStockError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = FieldStockError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = FieldStockError("Test error", code="TEST", details={"key": "value"})
        assert error.to_dict() == {
            "error": "TEST",
            "message": "Test error",
            "details": {"key": "value"},
        }

    def test_can_be_raised_and_caught(self):
        with pytest.raises(FieldStockError) as exc_info:
            raise FieldStockError("Test")
        assert exc_info.value.message == "Test"


class TestInventoryExceptions:
    """Tests for inventory-related exceptions."""

    def test_insufficient_quantity(self):
        error = InsufficientQuantityError(available=5, requested=8, inventory_id=42)
        assert error.message == "Insufficient quantity. Available: 5, Requested: 8"
        assert error.code == "INSUFFICIENT_QUANTITY"
        assert error.details == {"available": 5, "requested": 8, "inventory_id": 42}
        assert isinstance(error, InventoryError)

    def test_record_not_found(self):
        error = RecordNotFoundError("id 9", details={"inventory_id": 9})
        assert "id 9" in error.message
        assert error.code == "RECORD_NOT_FOUND"
        assert error.details["inventory_id"] == 9

    def test_required_reference_missing(self):
        error = RequiredReferenceMissingError("location", "With Crew")
        assert error.message == "With Crew location not found"
        assert error.code == "REQUIRED_REFERENCE_MISSING"
        assert error.details == {"kind": "location", "name": "With Crew"}


class TestStorageExceptions:
    def test_persistence_error(self):
        error = PersistenceError("bulk add", "database is locked")
        assert "bulk add" in error.message
        assert "database is locked" in error.message
        assert error.code == "PERSISTENCE_ERROR"
        assert isinstance(error, StorageError)


class TestEdgeFunctionExceptions:
    def test_edge_function_error(self):
        error = EdgeFunctionError("reject-inventory", "HTTP 500", status_code=500)
        assert error.code == "EDGE_FUNCTION_ERROR"
        assert error.details["status_code"] == 500

    def test_unavailable_is_edge_error(self):
        error = EdgeFunctionUnavailableError("return-inventory")
        assert isinstance(error, EdgeFunctionError)
        assert error.code == "EDGE_FUNCTION_UNAVAILABLE"
        assert "disabled" in error.message

    def test_circuit_breaker_open(self):
        error = CircuitBreakerOpenError("issue-serialized-inventory", cooldown_remaining=42)
        assert error.code == "CIRCUIT_BREAKER_OPEN"
        assert error.details["cooldown_remaining"] == 42
        assert isinstance(error, EdgeFunctionError)


class TestValidationError:
    def test_validation_error(self):
        error = ValidationError("passed", "exceeds available quantity", 15)
        assert error.code == "VALIDATION_ERROR"
        assert error.details["field"] == "passed"
        assert error.details["value"] == "15"

    def test_long_value_truncated(self):
        error = ValidationError("notes", "too long", "x" * 500)
        assert len(error.details["value"]) == 100

    def test_configuration_error_is_base(self):
        assert isinstance(ConfigurationError("missing"), FieldStockError)
