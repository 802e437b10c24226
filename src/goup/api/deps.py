"""
goup.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for DB sessions and the document store.
- Expose the shared media storage and outbound HTTP client.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from goup.documents.store import DocumentStore
from goup.errors import GoUpError
from goup.media.storage import MediaStorage


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the lifespan of `goup.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed explicitly by the service layer.
    async with session_factory() as session:
        yield session


def document_store(request: Request) -> DocumentStore:
    return request.app.state.documents  # type: ignore[attr-defined]


def media_storage(request: Request) -> MediaStorage:
    return request.app.state.media  # type: ignore[attr-defined]


def http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http  # type: ignore[attr-defined]


def decode_form_data(raw: str | None) -> dict[str, Any]:
    """Multipart endpoints carry the form values as one JSON field next to the files."""

    if not raw:
        return {}
    try:
        values = json.loads(raw)
    except ValueError:
        raise GoUpError("Formato inválido") from None
    if not isinstance(values, dict):
        raise GoUpError("Formato inválido")
    return values


# --- Module Notes -----------------------------------------------------------
# Settings are injected with `Depends(get_settings)`; the app factory overrides it.
