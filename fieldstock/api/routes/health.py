"""
Health check endpoints.

``/db`` fails when any inventory or reference table is missing, since every
operation needs all of them. ``/edge`` only reports degraded: operations fall
back to local processing when the edge functions are unavailable.
"""

import time

from fastapi import APIRouter

from fieldstock.api.dependencies import get_edge
from fieldstock.application.dto.responses import HealthResponse, ProviderHealthResponse
from fieldstock.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

_start_time = time.time()


def _response(status: str, **providers: ProviderHealthResponse) -> HealthResponse:
    return HealthResponse(
        status=status,
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
        **providers,
    )


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service status and uptime."""
    return _response("healthy")


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """SQLite reachability and schema completeness."""
    from fieldstock.infrastructure.storage.sqlite import get_pool
    from fieldstock.infrastructure.storage.sqlite.schema import TABLES

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            present = {row[0] for row in await cursor.fetchall()}
        latency = (time.time() - start) * 1000

        missing = [table for table in TABLES if table not in present]
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=not missing,
            latency_ms=latency,
            error=f"missing tables: {', '.join(missing)}" if missing else None,
        )
    except Exception as e:
        db_status = ProviderHealthResponse(name="sqlite", available=False, error=str(e))

    return _response("healthy" if db_status.available else "unhealthy", database=db_status)


@router.get("/edge", response_model=HealthResponse)
async def edge_health() -> HealthResponse:
    """Whether remote processing is enabled and its circuit breaker closed."""
    client = get_edge()
    breaker = client.circuit_breaker

    if not client.enabled:
        edge_status = ProviderHealthResponse(name="edge", available=False, error="disabled")
    elif breaker.is_open:
        edge_status = ProviderHealthResponse(
            name="edge",
            available=False,
            error=f"circuit open after {breaker.failures} failures",
        )
    else:
        edge_status = ProviderHealthResponse(name="edge", available=True)

    status = "healthy" if edge_status.available or not client.enabled else "degraded"
    return _response(status, edge_functions=edge_status)
