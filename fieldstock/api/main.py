"""
FastAPI application for the inventory service.

Startup bootstraps the schema, opens the connection pool and checks that the
statuses, locations and configuration keys the operations resolve by name are
present. Missing reference data is only warned about: each operation that
needs it fails with REQUIRED_REFERENCE_MISSING before writing anything.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fieldstock.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from fieldstock.api.middleware.error_handler import setup_exception_handlers
from fieldstock.api.routes import health_router, inventory_router
from fieldstock.config import configure_logging, get_logger, get_settings
from fieldstock.config.settings import InventorySettings
from fieldstock.core.entities.reference import ReferenceSnapshot

logger = get_logger(__name__)


def missing_references(refs: ReferenceSnapshot, inventory: InventorySettings) -> list[str]:
    """Reference names the orchestrators look up that the database lacks."""
    return refs.missing(
        statuses=[
            inventory.available_status,
            inventory.issued_status,
            inventory.rejected_status,
            inventory.installed_status,
            inventory.removed_status,
        ],
        locations=[inventory.with_crew_location, inventory.field_installed_location],
        config_keys=[inventory.receiving_location_key],
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    from fieldstock.infrastructure.storage.sqlite import (
        close_pool,
        get_pool,
        get_reference_store,
        initialize_database,
    )

    settings = get_settings()
    logger.info(
        "application_starting",
        db_path=str(settings.storage.db_path),
        edge_enabled=settings.edge.enabled,
    )

    try:
        await initialize_database()
        await get_pool()
        refs = await (await get_reference_store()).load_snapshot()
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    missing = missing_references(refs, settings.inventory)
    if missing:
        logger.warning("reference_data_incomplete", missing=missing)
    logger.info(
        "application_started",
        item_types=len(refs.item_types),
        statuses=len(refs.statuses),
        locations=len(refs.locations),
    )

    yield

    try:
        await close_pool()
    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))
    logger.info("application_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="FieldStock Inventory API",
        description="Bulk inventory reconciliation: receive, issue, return, reject, inspect and install",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(inventory_router)

    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Liveness probe for container orchestration."""
        return {"status": "healthy", "version": settings.app_version}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "fieldstock.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )


if __name__ == "__main__":
    run()
