"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from fieldstock.config.settings import EdgeFunctionSettings, InventorySettings, StorageSettings


def test_inventory_defaults():
    settings = InventorySettings()
    assert settings.with_crew_location == "With Crew"
    assert settings.receiving_location_key == "receivingLocation"
    assert settings.consolidate_after_field_install is True


def test_edge_settings_from_environment(monkeypatch):
    monkeypatch.setenv("EDGE_ENABLED", "true")
    monkeypatch.setenv("EDGE_BASE_URL", "https://edge.example.test/")

    settings = EdgeFunctionSettings()

    assert settings.enabled is True
    assert settings.functions_url == "https://edge.example.test/functions/v1"


def test_db_path(tmp_path):
    settings = StorageSettings(data_dir=tmp_path, db_name="stock.db")
    assert settings.db_path == tmp_path / "stock.db"


@pytest.mark.parametrize(
    "factory",
    [
        lambda: InventorySettings(serialized_type_id=2, bulk_type_id=2),
        lambda: StorageSettings(pool_size=0),
        lambda: EdgeFunctionSettings(failure_threshold=0),
    ],
)
def test_invalid_values_rejected(factory):
    with pytest.raises(ValidationError):
        factory()
