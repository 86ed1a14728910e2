"""Health endpoint tests."""

from contextlib import asynccontextmanager

import pytest


@pytest.mark.asyncio
async def test_health_returns_ok(client):
    """Health endpoint should return server status, version, and DB check."""
    resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["server"] == "ok"
    assert data["database"] == "ok"
    assert data["status"] == "healthy"
    assert "version" in data


class _UnreachableEngine:
    @asynccontextmanager
    async def connect(self):
        raise OSError("connection refused by 10.0.0.5:5432")
        yield


@pytest.mark.asyncio
async def test_health_hides_database_error(client, app, monkeypatch):
    monkeypatch.setattr(app.state.db, "engine", _UnreachableEngine())
    resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "degraded"
    assert data["database"] == "error"
    assert "10.0.0.5" not in resp.text
