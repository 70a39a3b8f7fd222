"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "fieldstock.db"

    # SQLite settings
    pool_size: int = Field(default=5, ge=1, description="Reader connections; writes use one extra connection")
    busy_timeout: int = Field(default=30000, ge=0)  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class EdgeFunctionSettings(BaseSettings):
    """Hosted edge function configuration."""

    model_config = SettingsConfigDict(env_prefix="EDGE_")

    enabled: bool = False
    base_url: str = ""
    access_token: str = ""
    app_version: str = "7.6"
    timeout: int = Field(default=30, gt=0)

    # Circuit breaker settings
    failure_threshold: int = Field(default=3, ge=1)
    cooldown_seconds: int = Field(default=60, ge=0)

    # Retry settings (connection errors only)
    max_retries: int = Field(default=2, ge=0)
    retry_delay: float = 0.5
    retry_multiplier: float = 2.0

    @property
    def functions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/functions/v1"


class InventorySettings(BaseSettings):
    """Names and keys the inventory operations resolve against reference data."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    serialized_type_id: int = 1
    bulk_type_id: int = 2

    # Configuration keys
    receiving_status_key: str = "receivingStatus"
    receiving_location_key: str = "receivingLocation"
    default_receiving_status: str = "Available"

    # Location names
    with_crew_location: str = "With Crew"
    field_installed_location: str = "Field Installed"

    # Status names
    available_status: str = "Available"
    issued_status: str = "Issued"
    rejected_status: str = "Rejected"
    installed_status: str = "Installed"
    removed_status: str = "Removed"

    consolidate_after_field_install: bool = True

    @model_validator(mode="after")
    def distinct_type_ids(self) -> "InventorySettings":
        if self.serialized_type_id == self.bulk_type_id:
            raise ValueError("serialized_type_id and bulk_type_id must differ")
        return self


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "FieldStock"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    user_name: str = "system"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    edge: EdgeFunctionSettings = Field(default_factory=EdgeFunctionSettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
