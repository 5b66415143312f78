"""Health endpoint integration test."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest.mark.asyncio
async def test_health_returns_ok():
    """Health endpoint returns status and service name."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["service"] == "code-quality-analyzer"


@pytest.mark.asyncio
async def test_request_id_echoed():
    """X-Request-ID from the client is returned; otherwise one is generated."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        given = await client.get("/health", headers={"X-Request-ID": "abc123"})
        generated = await client.get("/health")
    assert given.headers["x-request-id"] == "abc123"
    assert len(generated.headers["x-request-id"]) == 12
