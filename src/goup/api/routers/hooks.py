"""
goup.api.routers.hooks

Webhooks called by the database when a user signs up.
"""

from __future__ import annotations

import hmac
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Header
from fastapi.responses import PlainTextResponse, Response
from starlette.status import HTTP_401_UNAUTHORIZED

from goup.api.deps import http_client
from goup.notifications.email import ResendMailer
from goup.settings import Settings, get_settings

router = APIRouter(prefix="/hooks", tags=["hooks"])


@router.post("/new-user-email")
async def new_user_email(
    body: dict[str, Any],
    x_webhook_secret: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(http_client),
) -> Response:
    expected = settings.webhook_secret
    given = x_webhook_secret or ""
    if not expected or not hmac.compare_digest(given.encode(), expected.encode()):
        return PlainTextResponse("Unauthorized", status_code=HTTP_401_UNAUTHORIZED)

    reply = await ResendMailer(settings=settings, http=http).send_new_user(
        email=body.get("email"), user_id=body.get("id")
    )
    # Relay the provider's answer as-is.
    return Response(content=reply.body, status_code=reply.status_code)
