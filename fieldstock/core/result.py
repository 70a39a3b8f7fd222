"""
Result type for core services.

The upsert engine and consolidation pass report failures as values instead of
raising, so callers can decide per item whether to continue.
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

from fieldstock.core.exceptions import FieldStockError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the domain error."""

    error: FieldStockError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Ok[T] | Err
