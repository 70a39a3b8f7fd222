"""Tests for logging processors and operation scoping."""

import structlog

from fieldstock.config import operation_scope
from fieldstock.config.logging import add_app_context, expand_named_tuples
from fieldstock.core.services.equivalence import EquivalenceKey


def test_equivalence_key_rendered_as_fields():
    event = {"event": "bulk_upsert_created", "key": EquivalenceKey(10, None, None, 7, 1), "pair": (1, 2)}

    result = expand_named_tuples(None, "info", event)

    assert result["key"] == {
        "location_id": 10,
        "assigned_crew_id": None,
        "area_id": None,
        "item_type_id": 7,
        "status_id": 1,
    }
    assert result["pair"] == (1, 2)


def test_app_context_added():
    result = add_app_context(None, "info", {"event": "x"})
    assert result["app"] == "FieldStock"
    assert "environment" in result


def test_operation_scope_binds_and_clears():
    with operation_scope("issue", sloc_id=1):
        bound = structlog.contextvars.get_contextvars()
        assert (bound["operation"], bound["sloc_id"]) == ("issue", 1)
    assert "operation" not in structlog.contextvars.get_contextvars()
