"""Request ID middleware tests."""

import pytest


@pytest.mark.asyncio
async def test_request_id_generated(client):
    """Each request gets a unique X-Request-ID header."""
    r1 = await client.get("/health")
    r2 = await client.get("/health")
    assert "X-Request-ID" in r1.headers
    assert r1.headers["X-Request-ID"] != r2.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_request_id_propagated(client):
    r = await client.get("/health", headers={"X-Request-ID": "trace-12345"})
    assert r.headers["X-Request-ID"] == "trace-12345"
