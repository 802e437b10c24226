"""
tests.conftest

Shared fixtures: an app wired to a temporary SQLite file, the in-memory document
store, a temporary media root and faked outbound providers.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from goup.api.app import create_app
from goup.auth.jwt import JwtConfig, issue_token
from goup.db.models import User
from goup.db.repositories.users import UserRepo
from goup.settings import Settings


class FakeProviders:
    """Answers SendGrid, Resend and Slack calls and records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.sendgrid_status = 202
        self.sendgrid_body = ""
        self.resend_status = 200
        self.resend_body = '{"id": "em_1"}'

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if host == "api.sendgrid.com":
            return httpx.Response(self.sendgrid_status, text=self.sendgrid_body)
        if host == "api.resend.com":
            return httpx.Response(self.resend_status, text=self.resend_body)
        if host == "hooks.slack.test":
            return httpx.Response(200, text="ok")
        return httpx.Response(404, text="unknown host")

    def sent_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    @staticmethod
    def body(request: httpx.Request) -> dict[str, Any]:
        return json.loads(request.content)


@pytest.fixture
def providers() -> FakeProviders:
    return FakeProviders()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        jwt_secret="test-secret",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'goup.db'}",
        document_store_url="memory://",
        media_root=str(tmp_path / "media"),
        media_base_url="http://test/media",
        sendgrid_api_key="SG.test-key",
        mail_to="equipo@goupevents.cl",
        resend_api_key="re_test",
        slack_webhook_url="https://hooks.slack.test/services/T000",
        webhook_secret="s3cret",
    )


@pytest_asyncio.fixture
async def app(settings: Settings, providers: FakeProviders) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings, http_transport=httpx.MockTransport(providers.handle))
    # httpx ASGITransport does not run the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(settings: Settings) -> Callable[..., dict[str, str]]:
    def make(subject: str, *, email: str | None = None, name: str | None = None) -> dict[str, str]:
        token = issue_token(
            cfg=JwtConfig.from_settings(settings),
            subject=subject,
            email=email or f"{subject}@goupevents.cl",
            name=name,
        )
        return {"Authorization": f"Bearer {token}"}

    return make


@pytest.fixture
def seed_user(app: FastAPI) -> Callable[..., Awaitable[User]]:
    async def make(subject: str, **fields: Any) -> User:
        async with app.state.sessionmaker() as session:
            repo = UserRepo(session)
            user, _ = await repo.get_or_create(
                auth_subject=subject, email=f"{subject}@goupevents.cl", name=subject.title()
            )
            if fields:
                user = await repo.update(user.id, **fields)
            await session.commit()
            return user

    return make


# --- Module Notes -----------------------------------------------------------
# Every test gets a fresh database file and document store through `tmp_path`.
