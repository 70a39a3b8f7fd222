"""Reference data entities and the read-only snapshot passed to operations."""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field


class ItemType(BaseModel):
    """Catalog item type."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    inventory_type_id: int  # 1 = serialized, 2 = bulk


class NamedReference(BaseModel):
    """Status, location, crew or area."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class ReferenceSnapshot(BaseModel):
    """
    Read-only view of the reference tables and configuration.

    Loaded once per operation and passed explicitly into every use case, so an
    operation never observes reference data changing underneath it.
    """

    model_config = ConfigDict(frozen=True)

    item_types: dict[int, ItemType] = Field(default_factory=dict)
    statuses: dict[int, NamedReference] = Field(default_factory=dict)
    locations: dict[int, NamedReference] = Field(default_factory=dict)
    crews: dict[int, NamedReference] = Field(default_factory=dict)
    areas: dict[int, NamedReference] = Field(default_factory=dict)
    config: dict[str, str] = Field(default_factory=dict)

    def item_type(self, item_type_id: int) -> ItemType | None:
        return self.item_types.get(item_type_id)

    def item_type_name(self, item_type_id: int) -> str:
        item_type = self.item_types.get(item_type_id)
        return item_type.name if item_type else "Unknown"

    def status_named(self, name: str) -> NamedReference | None:
        return _find_by_name(self.statuses, name)

    def location_named(self, name: str) -> NamedReference | None:
        return _find_by_name(self.locations, name)

    def status_name(self, status_id: int | None) -> str | None:
        return _name_of(self.statuses, status_id)

    def location_name(self, location_id: int | None) -> str | None:
        return _name_of(self.locations, location_id)

    def crew_name(self, crew_id: int | None) -> str | None:
        return _name_of(self.crews, crew_id)

    def area_name(self, area_id: int | None) -> str | None:
        return _name_of(self.areas, area_id)

    def config_value(self, key: str) -> str | None:
        return self.config.get(key)

    def missing(
        self,
        statuses: Iterable[str] = (),
        locations: Iterable[str] = (),
        config_keys: Iterable[str] = (),
    ) -> list[str]:
        """Names from the given lists that the snapshot lacks, as ``kind:name``."""
        absent = [f"status:{name}" for name in statuses if self.status_named(name) is None]
        absent += [f"location:{name}" for name in locations if self.location_named(name) is None]
        absent += [f"config:{key}" for key in config_keys if key not in self.config]
        return absent


def _find_by_name(refs: dict[int, NamedReference], name: str) -> NamedReference | None:
    for ref in refs.values():
        if ref.name == name:
            return ref
    return None


def _name_of(refs: dict[int, NamedReference], ref_id: int | None) -> str | None:
    if ref_id is None:
        return None
    ref = refs.get(ref_id)
    return ref.name if ref else "Unknown"
