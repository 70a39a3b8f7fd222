"""API tests for health endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from fieldstock.api.main import app, missing_references
from fieldstock.config import get_settings
from fieldstock.core.entities.reference import NamedReference
from fieldstock.infrastructure.edge import CircuitBreakerState
from fieldstock.infrastructure.storage.sqlite import connection
from fieldstock.infrastructure.storage.sqlite.connection import ConnectionPool
from tests.support import build_snapshot


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def _edge(enabled: bool, breaker: CircuitBreakerState | None = None) -> MagicMock:
    edge = MagicMock()
    edge.enabled = enabled
    edge.circuit_breaker = breaker or CircuitBreakerState()
    return edge


class TestHealth:
    async def test_basic(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["uptime_seconds"] >= 0

    async def test_root(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    async def test_request_id_header_round_trip(self, client):
        resp = await client.get("/api/health", headers={"X-Request-ID": "req-42"})
        assert resp.headers["X-Request-ID"] == "req-42"
        assert "X-Response-Time" in resp.headers

    async def test_db(self, client, sqlite_db):
        resp = await client.get("/api/health/db")
        assert resp.status_code == 200
        data = resp.json()
        assert data["database"]["available"] is True
        assert data["status"] == "healthy"

    async def test_db_without_schema_is_unhealthy(self, client, tmp_path):
        pool = ConnectionPool(tmp_path / "empty.db", pool_size=1)
        await pool.initialize()
        try:
            with patch.object(connection, "_pool", pool):
                resp = await client.get("/api/health/db")
        finally:
            await pool.close()

        data = resp.json()
        assert data["status"] == "unhealthy"
        assert data["database"]["available"] is False
        assert "inventory" in data["database"]["error"]


class TestEdgeHealth:
    async def test_disabled_edge_is_healthy(self, client):
        with patch("fieldstock.api.routes.health.get_edge", return_value=_edge(enabled=False)):
            resp = await client.get("/api/health/edge")

        data = resp.json()
        assert data["status"] == "healthy"
        assert data["edge_functions"]["error"] == "disabled"

    async def test_open_circuit_degrades(self, client):
        breaker = CircuitBreakerState(failure_threshold=1)
        breaker.record_failure()

        with patch("fieldstock.api.routes.health.get_edge", return_value=_edge(True, breaker)):
            resp = await client.get("/api/health/edge")

        data = resp.json()
        assert data["status"] == "degraded"
        assert data["edge_functions"]["available"] is False

    async def test_enabled_and_closed(self, client):
        with patch("fieldstock.api.routes.health.get_edge", return_value=_edge(enabled=True)):
            resp = await client.get("/api/health/edge")

        assert resp.json()["edge_functions"]["available"] is True


class TestStartupReferenceCheck:
    def test_complete_reference_data(self):
        assert missing_references(build_snapshot(), get_settings().inventory) == []

    def test_reports_each_missing_name(self):
        refs = build_snapshot(
            statuses={1: NamedReference(id=1, name="Available"), 2: NamedReference(id=2, name="Issued")},
            locations={10: NamedReference(id=10, name="Warehouse")},
            config={},
        )

        missing = missing_references(refs, get_settings().inventory)

        assert missing == [
            "status:Rejected",
            "status:Installed",
            "status:Removed",
            "location:With Crew",
            "location:Field Installed",
            "config:receivingLocation",
        ]
