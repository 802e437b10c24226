from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_new_user_hook_requires_the_shared_secret(client: httpx.AsyncClient, providers) -> None:
    r = await client.post("/hooks/new-user-email", json={"email": "a@goupevents.cl", "id": "u1"})
    assert r.status_code == 401
    assert r.text == "Unauthorized"

    r = await client.post(
        "/hooks/new-user-email",
        json={"email": "a@goupevents.cl", "id": "u1"},
        headers={"x-webhook-secret": "wrong"},
    )
    assert r.status_code == 401
    assert providers.sent_to("api.resend.com") == []


@pytest.mark.asyncio
async def test_new_user_hook_relays_the_provider_reply(client: httpx.AsyncClient, providers) -> None:
    providers.resend_status = 422
    providers.resend_body = '{"message": "invalid from"}'
    r = await client.post(
        "/hooks/new-user-email",
        json={"email": "nuevo@goupevents.cl", "id": "u-42"},
        headers={"x-webhook-secret": "s3cret"},
    )
    assert r.status_code == 422
    assert r.text == '{"message": "invalid from"}'

    [sent] = providers.sent_to("api.resend.com")
    assert sent.headers["authorization"] == "Bearer re_test"
    payload = providers.body(sent)
    assert payload["to"] == ["equipo@goupevents.cl"]
    assert payload["subject"] == "Nuevo usuario registrado: nuevo@goupevents.cl"
    assert "u-42" in payload["html"]
