"""
goup.notifications.email

HTTP client boundary for transactional email providers.

Responsibilities:
- Render the role request summary and send it through SendGrid v3.
- Send the "new user registered" notice through Resend.
- Surface provider rejections as `UpstreamError`.
"""

from __future__ import annotations

import html
from dataclasses import dataclass

import httpx

from goup.errors import UpstreamError
from goup.observability.logging import get_logger
from goup.settings import Settings

log = get_logger(__name__)

ROLE_REQUEST_SUBJECT = "Nueva solicitud de acceso (GoUp)"
SENDER_NAME = "GoUp"
EMPTY = "—"


@dataclass(frozen=True, slots=True)
class RoleRequestEmail:
    email: str | None = None
    nombre: str | None = None
    fecha_nacimiento: str | None = None
    calle: str | None = None
    ciudad: str | None = None
    comuna: str | None = None
    pais: str | None = None
    tipo_solicitud: str | None = None

    @property
    def address(self) -> str:
        parts = (self.calle, self.comuna, self.ciudad, self.pais)
        return ", ".join(p for p in parts if p)


def _cell(value: str | None) -> str:
    return html.escape(value) if value else EMPTY


def render_role_request_html(req: RoleRequestEmail) -> str:
    return (
        "<h2>Solicitud de acceso</h2>\n"
        "<ul>\n"
        f"  <li><b>Email:</b> {_cell(req.email)}</li>\n"
        f"  <li><b>Nombre:</b> {_cell(req.nombre)}</li>\n"
        f"  <li><b>Fecha nacimiento:</b> {_cell(req.fecha_nacimiento)}</li>\n"
        f"  <li><b>Dirección:</b> {_cell(req.address)}</li>\n"
        f"  <li><b>Tipo:</b> {_cell(req.tipo_solicitud)}</li>\n"
        "</ul>\n"
        "<p>Estado inicial: pendiente</p>\n"
    )


class SendGridMailer:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    def _api_key(self) -> str:
        key = self._settings.sendgrid_api_key
        if not key:
            log.error("sendgrid_key_missing")
            raise UpstreamError("SENDGRID_API_KEY missing")
        if not key.startswith("SG."):
            log.error("sendgrid_key_malformed")
            raise UpstreamError("Invalid SENDGRID_API_KEY format")
        return key

    def build_payload(self, req: RoleRequestEmail) -> dict:
        return {
            "personalizations": [
                {
                    "to": [{"email": self._settings.mail_to}],
                    "subject": ROLE_REQUEST_SUBJECT,
                }
            ],
            "from": {"email": self._settings.sendgrid_from, "name": SENDER_NAME},
            "content": [{"type": "text/html", "value": render_role_request_html(req)}],
        }

    async def send_role_request(self, req: RoleRequestEmail) -> None:
        key = self._api_key()
        r = await self._http.post(
            self._settings.sendgrid_url,
            headers={"Authorization": f"Bearer {key}"},
            json=self.build_payload(req),
        )
        # SendGrid answers 202 when it accepts the message; anything else is a failure.
        if r.status_code != 202:
            log.error("sendgrid_rejected", status=r.status_code, body=r.text)
            raise UpstreamError("SendGrid failed", upstream_body=r.text)
        log.info("role_request_email_sent", tipo=req.tipo_solicitud)


@dataclass(frozen=True, slots=True)
class ProviderReply:
    status_code: int
    body: str


class ResendMailer:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    async def send_new_user(self, *, email: str | None, user_id: str | None) -> ProviderReply:
        key = self._settings.resend_api_key
        if not key:
            raise UpstreamError("RESEND_API_KEY missing")

        body = (
            "<h2>Nuevo usuario</h2>\n"
            f"<p><b>Email:</b> {html.escape(str(email))}</p>\n"
            f"<p><b>ID:</b> {html.escape(str(user_id))}</p>\n"
            "<p>Asigna sus roles en el panel admin.</p>\n"
        )
        r = await self._http.post(
            self._settings.resend_url,
            headers={"Authorization": f"Bearer {key}"},
            json={
                "from": self._settings.resend_from,
                "to": [self._settings.mail_to],
                "subject": f"Nuevo usuario registrado: {email}",
                "html": body,
            },
        )
        log.info("new_user_email_relayed", status=r.status_code)
        return ProviderReply(status_code=r.status_code, body=r.text)


# --- Module Notes -----------------------------------------------------------
# Provider base URLs come from settings so tests can route them to a MockTransport.
