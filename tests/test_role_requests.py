"""
tests.test_role_requests

Role request flow for signed-in users and the standalone SendGrid relay.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from goup.notifications.email import RoleRequestEmail, render_role_request_html
from goup.settings import Settings, get_settings

REQUEST = {
    "nombre": "María Pérez",
    "fecha_nacimiento": "1990-04-02",
    "calle": "Av 1",
    "ciudad": "Santiago",
    "pais": "Chile",
    "solicitud_tipo": "productor",
}


def test_summary_html_escapes_and_fills_blanks() -> None:
    html = render_role_request_html(
        RoleRequestEmail(email="a@goupevents.cl", nombre="<b>Ana</b>", calle="Av 1", pais="Chile")
    )
    assert "&lt;b&gt;Ana&lt;/b&gt;" in html
    assert "<b>Dirección:</b> Av 1, Chile" in html
    assert "<b>Fecha nacimiento:</b> —" in html


@pytest.mark.asyncio
async def test_submit_stores_request_and_emails_the_team(
    client: httpx.AsyncClient, auth_headers, providers
) -> None:
    headers = auth_headers("maria")
    r = await client.post("/v1/role-requests", json=REQUEST, headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["tipo"] == "productor"
    assert body["estado"] == "pendiente"
    assert body["enviada_at"]
    assert body["email_sent"] is True

    [sent] = providers.sent_to("api.sendgrid.com")
    assert sent.headers["authorization"] == "Bearer SG.test-key"
    payload = providers.body(sent)
    assert payload["personalizations"][0]["to"] == [{"email": "equipo@goupevents.cl"}]
    assert payload["personalizations"][0]["subject"] == "Nueva solicitud de acceso (GoUp)"
    html = payload["content"][0]["value"]
    assert "Av 1, Santiago, Chile" in html
    assert "maria@goupevents.cl" in html

    r = await client.get("/v1/role-requests/me", headers=headers)
    assert r.json()["estado"] == "pendiente"

    r = await client.get("/v1/me", headers=headers)
    assert r.json()["nombre"] == "María Pérez"


@pytest.mark.asyncio
async def test_failed_email_keeps_the_request(client: httpx.AsyncClient, auth_headers, providers) -> None:
    providers.sendgrid_status = 500
    providers.sendgrid_body = "boom"
    r = await client.post("/v1/role-requests", json=REQUEST, headers=auth_headers("maria"))
    assert r.status_code == 200
    assert r.json()["estado"] == "pendiente"
    assert r.json()["email_sent"] is False


@pytest.mark.asyncio
async def test_invalid_request_type_is_rejected(client: httpx.AsyncClient, auth_headers, providers) -> None:
    r = await client.post(
        "/v1/role-requests", json={**REQUEST, "solicitud_tipo": "dj"}, headers=auth_headers("maria")
    )
    assert r.status_code == 422
    assert r.json()["detail"] == "Selecciona una opción"
    assert providers.sent_to("api.sendgrid.com") == []


@pytest.mark.asyncio
async def test_resend_needs_an_existing_request(client: httpx.AsyncClient, auth_headers) -> None:
    headers = auth_headers("maria")
    r = await client.post("/v1/role-requests/resend", headers=headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "No tienes una solicitud para reenviar"

    await client.post("/v1/role-requests", json=REQUEST, headers=headers)
    r = await client.post("/v1/role-requests/resend", headers=headers)
    assert r.status_code == 200
    assert r.json()["estado"] == "pendiente"


@pytest.mark.asyncio
async def test_relay_sends_and_reports_ok(client: httpx.AsyncClient, providers) -> None:
    r = await client.post(
        "/api/sendgrid-role-request",
        json={"email": "ana@goupevents.cl", "nombre": "Ana", "tipo_solicitud": "ambos"},
    )
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert len(providers.sent_to("api.sendgrid.com")) == 1


@pytest.mark.asyncio
async def test_relay_reports_provider_rejection(client: httpx.AsyncClient, providers) -> None:
    providers.sendgrid_status = 401
    providers.sendgrid_body = '{"errors": [{"message": "bad key"}]}'
    r = await client.post("/api/sendgrid-role-request", json={"email": "ana@goupevents.cl"})
    assert r.status_code == 500
    assert r.json() == {
        "ok": False,
        "error": "SendGrid failed",
        "detail": '{"errors": [{"message": "bad key"}]}',
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("key", "error"),
    [(None, "SENDGRID_API_KEY missing"), ("not-a-key", "Invalid SENDGRID_API_KEY format")],
)
async def test_relay_checks_the_api_key(
    app: FastAPI, client: httpx.AsyncClient, settings: Settings, providers, key, error
) -> None:
    app.dependency_overrides[get_settings] = lambda: settings.model_copy(update={"sendgrid_api_key": key})
    r = await client.post("/api/sendgrid-role-request", json={"email": "ana@goupevents.cl"})
    assert r.status_code == 500
    assert r.json() == {"ok": False, "error": error}
    assert providers.sent_to("api.sendgrid.com") == []


@pytest.mark.asyncio
async def test_relay_only_accepts_post(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/sendgrid-role-request")
    assert r.status_code == 405
    assert r.json() == {"ok": False, "error": "Method Not Allowed"}
