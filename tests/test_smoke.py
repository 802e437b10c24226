"""
tests.test_smoke

Minimal smoke tests to validate the service can boot and serve core endpoints.

Responsibilities:
- Ensure the FastAPI app starts and both readiness checks work in test mode.
"""

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_request_id_is_echoed_and_included_in_errors(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/clubs/nope", headers={"x-request-id": "req-123"})
    assert r.status_code == 404
    assert r.headers["x-request-id"] == "req-123"
    assert r.json() == {"detail": "Club no encontrado", "request_id": "req-123"}


@pytest.mark.asyncio
async def test_dev_token_can_sign_in(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/dev/token", json={"subject": "dev-user", "email": "dev@goupevents.cl"})
    assert r.status_code == 200
    token = r.json()["access_token"]

    r = await client.get("/v1/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json()["uid"] == "dev-user"
