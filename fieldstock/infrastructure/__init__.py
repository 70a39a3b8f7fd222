"""Infrastructure layer implementations."""

from fieldstock.infrastructure import edge, storage

__all__ = ["storage", "edge"]
