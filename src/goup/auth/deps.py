"""
goup.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Identity`.
- Load the user record, creating it on first sign-in.
- Enforce role guards via reusable dependency factories.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from goup.api.deps import db_session
from goup.auth.guards import LOGIN_PATH, UNAUTHORIZED_PATH, has_any_role
from goup.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, identity_from_claims
from goup.auth.models import Identity
from goup.db.models import Role, User
from goup.db.repositories.users import UserRepo
from goup.observability.logging import get_logger
from goup.settings import Settings, get_settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> Identity:
    if creds is None or not creds.credentials:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail={"message": "Debes iniciar sesión", "redirect": LOGIN_PATH},
        )

    try:
        claims = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
        return identity_from_claims(claims)
    except JwtValidationError as e:
        log.info("token_rejected", reason=str(e))
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail={"message": "Sesión inválida o expirada", "redirect": LOGIN_PATH},
        ) from e


async def current_user(
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> User:
    # First sign-in creates the record with the base role.
    user, created = await UserRepo(session).get_or_create(
        auth_subject=identity.subject,
        email=identity.email,
        name=identity.name,
    )
    if created:
        await session.commit()
        log.info("user_created", uid=identity.subject)
    return user


async def active_user(user: User = Depends(current_user)) -> User:
    if not user.is_active:
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN,
            detail={"message": "Tu cuenta está deshabilitada", "redirect": UNAUTHORIZED_PATH},
        )
    return user


def require_roles(*allowed: Role):
    allowed_set = frozenset(allowed)

    async def _dep(user: User = Depends(active_user)) -> User:
        if not has_any_role(user, allowed_set):
            log.info("role_denied", uid=user.auth_subject, role=str(user.role))
            raise HTTPException(
                status_code=HTTP_403_FORBIDDEN,
                detail={"message": "No autorizado", "redirect": UNAUTHORIZED_PATH},
            )
        return user

    return _dep


# --- Module Notes -----------------------------------------------------------
# Admins pass a guard only where the route lists `Role.admin` (every guarded area
# currently does).
