"""
tests.test_submit

Generic entity submission endpoint and its chat notification.
"""

from __future__ import annotations

import httpx
import pytest

from goup.services.submissions import SubmissionRejected, parse_submission

PRODUCER = {"nombre": "Sonido Sur", "correo": "hola@sonidosur.cl", "tel": "+56900000000"}


@pytest.mark.parametrize(
    "body",
    [None, [], {}, {"type": "producer"}, {"type": "", "payload": PRODUCER}, {"type": "producer", "payload": 0}],
)
def test_envelope_must_carry_type_and_payload(body) -> None:
    with pytest.raises(SubmissionRejected) as exc:
        parse_submission(body)
    assert exc.value.detail == "Formato inválido"
    assert exc.value.issues is None


def test_unknown_type_is_not_supported() -> None:
    with pytest.raises(SubmissionRejected) as exc:
        parse_submission({"type": "dj", "payload": {"nombre": "x"}})
    assert exc.value.detail == "Tipo no soportado"


def test_payload_is_validated_against_its_type() -> None:
    with pytest.raises(SubmissionRejected) as exc:
        parse_submission({"type": "producer", "payload": {"nombre": "S"}})
    assert exc.value.detail == "Validación falló"
    assert exc.value.issues == [
        {"path": ["nombre"], "message": "Ingresa el nombre de la productora", "code": "too_short"},
        {"path": ["correo"], "message": "Email inválido", "code": "email"},
    ]

    kind, data = parse_submission({"type": "producer", "payload": PRODUCER})
    assert kind == "producer"
    assert data["nombre"] == "Sonido Sur"
    assert data["rut"] is None


@pytest.mark.asyncio
async def test_accepted_submission_is_posted_to_chat(client: httpx.AsyncClient, providers) -> None:
    r = await client.post("/api/submit", json={"type": "producer", "payload": PRODUCER})
    assert r.status_code == 200
    assert r.json() == {"ok": True}

    [post] = providers.sent_to("hooks.slack.test")
    text = providers.body(post)["text"]
    assert text.startswith("Nuevo registro (producer):\n```")
    assert '"nombre": "Sonido Sur"' in text


@pytest.mark.asyncio
async def test_rejected_submission_keeps_error_shape(client: httpx.AsyncClient, providers) -> None:
    r = await client.post("/api/submit", json={"type": "club", "payload": {"nombre": "X"}})
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Validación falló"
    assert {"path": ["nombre"], "message": "Ingresa el nombre del club", "code": "too_short"} in body["issues"]

    r = await client.post("/api/submit", json={"type": "event", "payload": {"nombre": "Fiesta", "generos": 5}})
    assert r.status_code == 400
    assert {"path": ["generos"], "message": "Selección inválida", "code": "list_type"} in r.json()["issues"]

    r = await client.post("/api/submit", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Formato inválido"}

    r = await client.post("/api/submit", json={"type": "boda", "payload": {"a": 1}})
    assert r.json() == {"error": "Tipo no soportado"}
    assert providers.sent_to("hooks.slack.test") == []


@pytest.mark.asyncio
async def test_submit_only_accepts_post(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/submit")
    assert r.status_code == 405
    assert r.json() == {"error": "Method not allowed"}
