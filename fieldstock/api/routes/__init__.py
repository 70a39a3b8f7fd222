"""API route modules."""

from fieldstock.api.routes.health import router as health_router
from fieldstock.api.routes.inventory import router as inventory_router

__all__ = [
    "health_router",
    "inventory_router",
]
