"""
goup.auth.jwt

Identity token handling.

Responsibilities:
- Validate provider tokens (iss/aud/exp/iat/sub required, small clock leeway).
- Map validated claims to an `Identity`.
- Mint tokens for the dev sign-in endpoint and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from goup.auth.models import Identity
from goup.settings import Settings

REQUIRED_CLAIMS = ("exp", "iat", "iss", "aud", "sub")


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str
    leeway: timedelta = timedelta(0)

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
            leeway=timedelta(seconds=settings.jwt_leeway_seconds),
        )


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    email: str | None = None,
    name: str | None = None,
    ttl: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(tz=UTC)
    claims: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "iat": now,
        "exp": now + ttl,
    }
    # Same optional profile claims the provider puts in its ID tokens.
    claims.update({k: v for k, v in (("email", email), ("name", name)) if v})
    return jwt.encode(claims, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            leeway=cfg.leeway,
            options={"require": list(REQUIRED_CLAIMS)},
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


def identity_from_claims(claims: dict[str, Any]) -> Identity:
    subject = str(claims.get("sub") or "").strip()
    if not subject:
        raise JwtValidationError("empty subject")

    def optional(key: str) -> str | None:
        value = claims.get(key)
        return str(value) if value else None

    return Identity(subject=subject, email=optional("email"), name=optional("name"))


# --- Module Notes -----------------------------------------------------------
# Production identity providers usually sign with RS256 + JWKS; switching means
# replacing `secret` with the provider's public key and `alg` with RS256.
