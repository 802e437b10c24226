"""
goup.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the API, both data stores and outbound providers.
- Hide secrets (token secret, provider API keys) from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GOUP_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and dev tokens.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "goup-api"
    log_level: str = "INFO"
    # Console output for local runs; JSON lines everywhere else.
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080
    forwarded_allow_ips: str = "127.0.0.1"

    # Identity provider tokens
    jwt_alg: str = "HS256"
    jwt_issuer: str = "goup-identity"
    jwt_audience: str = "goup-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    jwt_leeway_seconds: int = 30

    # Relational store (users, producers)
    database_url: str = "sqlite+aiosqlite:///./goup.db"
    db_pool_size: int = 5

    # Document store (clubs, events). "memory://" keeps documents in-process.
    document_store_url: str = "memory://"
    document_store_db: str = "goup"

    # Uploaded media
    media_root: str = "./media"
    media_base_url: str = "http://localhost:8080/media"
    avatar_max_bytes: int = 3 * 1024 * 1024

    # Transactional email
    sendgrid_api_key: str | None = Field(default=None, repr=False)
    sendgrid_from: str = "no-reply@example.com"
    sendgrid_url: str = "https://api.sendgrid.com/v3/mail/send"
    mail_to: str = "pablo@goupevents.cl"
    resend_api_key: str | None = Field(default=None, repr=False)
    resend_from: str = "GoUp <noreply@goup.yourdomain>"
    resend_url: str = "https://api.resend.com/emails"

    # Chat notification for generic submissions (disabled when unset)
    slack_webhook_url: str | None = None

    # Shared secret for the new-user database trigger
    webhook_secret: str | None = Field(default=None, repr=False)

    http_timeout_seconds: float = 10.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `api.app.create_app` overrides `get_settings` so every dependency sees the instance
# the app was built with (tests build apps with explicit settings).
