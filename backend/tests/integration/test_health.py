"""Tests for the health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from qa_moderation.main import app


@pytest.mark.asyncio
async def test_health_check_reports_service_and_backend():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "Q&A Moderation API"
    assert data["database"] in {"sqlite", "postgresql"}
    assert "version" in data


@pytest.mark.asyncio
async def test_health_check_needs_no_user():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health", headers={"X-User-Id": "not-a-number"})

    assert response.status_code == 200
