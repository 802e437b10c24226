"""
goup.api.routers.submit

Generic entity submission endpoint (`POST /api/submit`).

Responses keep the `{"error": ...}` body shape the web client reads:
400 for envelope/type/validation problems, 500 for anything unexpected.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from goup.api.deps import http_client
from goup.notifications.chat import ChatWebhook
from goup.observability.logging import get_logger
from goup.services.submissions import BAD_ENVELOPE, SubmissionRejected, submit
from goup.settings import Settings, get_settings

log = get_logger(__name__)

router = APIRouter(tags=["submit"])


@router.post("/api/submit")
async def submit_entity(
    request: Request,
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(http_client),
) -> JSONResponse:
    try:
        body: Any = json.loads(await request.body() or b"null")
    except ValueError:
        return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"error": BAD_ENVELOPE})

    chat = (
        ChatWebhook(url=settings.slack_webhook_url, http=http)
        if settings.slack_webhook_url
        else None
    )
    try:
        await submit(body, chat=chat)
    except SubmissionRejected as e:
        content: dict[str, Any] = {"error": e.detail}
        if e.issues is not None:
            content["issues"] = e.issues
        return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content=content)
    except Exception:
        log.exception("submission_failed")
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Error interno"}
        )
    return JSONResponse(content={"ok": True})


@router.api_route(
    "/api/submit", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False
)
async def submit_method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method not allowed"},
        headers={"Allow": "POST"},
    )
