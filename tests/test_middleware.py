"""Tests for middleware components."""
import pytest
from httpx import AsyncClient, ASGITransport

from conftest import AUTH


@pytest.mark.asyncio
async def test_correlation_id_injection(app):
    """Test that correlation ID is auto-generated if not provided."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/events", headers=AUTH)

    assert response.status_code == 200
    assert response.headers["X-Correlation-ID"]


@pytest.mark.asyncio
async def test_correlation_id_preserved_in_error_body(app):
    """Test that a provided correlation ID is echoed in headers and error bodies."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get(
            "/subscriptions/missing",
            headers={**AUTH, "X-Correlation-ID": "test-correlation-123"},
        )

    assert response.status_code == 404
    assert response.headers["X-Correlation-ID"] == "test-correlation-123"
    data = response.json()
    assert data["correlation_id"] == "test-correlation-123"
    assert data["path"] == "/subscriptions/missing"
    assert data["status_code"] == 404


@pytest.mark.asyncio
async def test_payload_too_large_rejection(app, settings):
    """Test that oversized payloads are rejected."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/subscriptions",
            json={"id": "big", "clientName": "x" * (settings.MAX_BODY_SIZE + 100)},
            headers=AUTH,
        )

    assert response.status_code == 413
    data = response.json()
    assert data["error"] == "PayloadTooLarge"
    assert data["max_size"] == settings.MAX_BODY_SIZE


@pytest.mark.asyncio
async def test_invalid_json_rejection(app):
    """Test that invalid JSON is rejected before routing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/subscriptions",
            content=b'{"id": "broken",',
            headers={**AUTH, "Content-Type": "application/json"},
        )

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidJSON"


@pytest.mark.asyncio
async def test_valid_json_reaches_route(app):
    """The validated body is still readable by the route."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/subscriptions",
            json={
                "id": "ok",
                "clientName": "ven",
                "programID": "1",
                "objectOperations": [{"objectType": ["EVENT"], "callbackUrl": "http://ven/cb"}],
            },
            headers=AUTH,
        )

    assert response.status_code == 200
    assert response.json()["id"] == "ok"
