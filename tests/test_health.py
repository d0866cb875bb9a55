"""Tests for health endpoint and error envelopes."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health endpoint returns ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_validation_error_envelope(client: AsyncClient):
    """Malformed request bodies get the structured 400 envelope."""
    response = await client.post(
        "/api/register",
        content="not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    data = response.json()
    assert data["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_unhandled_error_envelope(client: AsyncClient, repo):
    """Unexpected write failures become INTERNAL_ERROR carrying the exception message."""
    repo.fail_on.add("create_contact_submission")
    response = await client.post(
        "/api/contact",
        json={"name": "Max", "email": "max@example.at", "subject": "Hallo", "message": "Test"},
    )
    assert response.status_code == 500
    data = response.json()
    assert data["error"]["code"] == "INTERNAL_ERROR"
    assert data["error"]["message"] == "create_contact_submission failed"


@pytest.mark.asyncio
async def test_unhandled_error_without_message_uses_fallback(client: AsyncClient, repo, monkeypatch):
    async def boom(values):
        raise RuntimeError()

    monkeypatch.setattr(repo, "create_contact_submission", boom)
    response = await client.post(
        "/api/contact",
        json={"name": "Max", "email": "max@example.at", "subject": "Hallo", "message": "Test"},
    )
    assert response.status_code == 500
    assert response.json()["error"]["message"] == "Internal server error"
