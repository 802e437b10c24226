"""
goup.api.routers.dev_auth

Local sign-in: mints the same kind of token the identity provider issues, so the
web client and tests can act as any user outside prod.
"""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field
from starlette.status import HTTP_404_NOT_FOUND

from goup.auth.jwt import JwtConfig, issue_token
from goup.observability.logging import get_logger
from goup.settings import Settings, get_settings

log = get_logger(__name__)

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevSignIn(BaseModel):
    subject: str = Field(min_length=1, max_length=128)
    email: EmailStr | None = None
    name: str | None = Field(default=None, max_length=256)
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevToken(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


@router.post("/token", response_model=DevToken)
async def dev_sign_in(body: DevSignIn, settings: Settings = Depends(get_settings)) -> DevToken:
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")

    ttl = timedelta(minutes=body.ttl_minutes)
    token = issue_token(
        cfg=JwtConfig.from_settings(settings),
        subject=body.subject,
        email=str(body.email) if body.email else None,
        name=body.name,
        ttl=ttl,
    )
    log.info("dev_token_issued", uid=body.subject)
    return DevToken(access_token=token, expires_in=int(ttl.total_seconds()))
