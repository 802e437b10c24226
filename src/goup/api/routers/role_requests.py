"""
goup.api.routers.role_requests

Role request endpoints.

Responsibilities:
- Signed-in flow: submit, resend and check a role request.
- Standalone email relay (`/api/sendgrid-role-request`) keeping the contract the
  web client already calls: `{"ok": true}` or `{"ok": false, "error": ...}`.
"""

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_405_METHOD_NOT_ALLOWED, HTTP_500_INTERNAL_SERVER_ERROR

from goup.api.deps import db_session, http_client
from goup.auth.deps import active_user
from goup.db.models import User
from goup.errors import UpstreamError
from goup.forms.errors import validate_form
from goup.forms.schemas import RoleRequestForm
from goup.notifications.email import RoleRequestEmail, SendGridMailer
from goup.observability.logging import get_logger
from goup.services.role_requests import RoleRequestService, request_view
from goup.settings import Settings, get_settings

log = get_logger(__name__)

router = APIRouter(prefix="/v1/role-requests", tags=["role-requests"])
relay_router = APIRouter(tags=["role-requests"])


def _service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(http_client),
) -> RoleRequestService:
    return RoleRequestService(session=session, mailer=SendGridMailer(settings=settings, http=http))


@router.post("")
async def submit_role_request(
    body: dict[str, Any],
    user: User = Depends(active_user),
    svc: RoleRequestService = Depends(_service),
) -> dict[str, Any]:
    form = validate_form(RoleRequestForm, body)
    updated, emailed = await svc.submit(user, form)
    return {**request_view(updated), "email_sent": emailed}


@router.post("/resend")
async def resend_role_request(
    user: User = Depends(active_user),
    svc: RoleRequestService = Depends(_service),
) -> dict[str, Any]:
    return request_view(await svc.resend(user))


@router.get("/me")
async def my_role_request(user: User = Depends(active_user)) -> dict[str, Any]:
    return request_view(user)


def _fail(error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR, content={"ok": False, "error": error, **extra}
    )


@relay_router.post("/api/sendgrid-role-request")
async def sendgrid_role_request(
    request: Request,
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(http_client),
) -> JSONResponse:
    try:
        raw = await request.body()
        body = json.loads(raw or b"{}")
        if isinstance(body, str):
            body = json.loads(body or "{}")
        if not isinstance(body, dict):
            body = {}
        values = {
            f.name: (str(body[f.name]) if body.get(f.name) else None)
            for f in fields(RoleRequestEmail)
            if f.name in body
        }
        await SendGridMailer(settings=settings, http=http).send_role_request(
            RoleRequestEmail(**values)
        )
    except UpstreamError as e:
        if e.upstream_body is None:
            return _fail(e.detail)
        return _fail(e.detail, detail=e.upstream_body)
    except (ValueError, httpx.HTTPError) as e:
        log.exception("sendgrid_role_request_failed")
        return _fail(str(e))
    return JSONResponse(content={"ok": True})


@relay_router.api_route(
    "/api/sendgrid-role-request", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False
)
async def sendgrid_role_request_method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_405_METHOD_NOT_ALLOWED,
        content={"ok": False, "error": "Method Not Allowed"},
        headers={"Allow": "POST"},
    )
