"""
goup.api.app

FastAPI app factory for the GoUp API.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine, document store, media
  storage, outbound HTTP client).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from goup import __version__
from goup.api.errors import install_error_handlers
from goup.api.routers.admin import router as admin_router
from goup.api.routers.clubs import router as clubs_router
from goup.api.routers.dev_auth import router as dev_auth_router
from goup.api.routers.events import router as events_router
from goup.api.routers.health import router as health_router
from goup.api.routers.hooks import router as hooks_router
from goup.api.routers.me import router as me_router
from goup.api.routers.producers import router as producers_router
from goup.api.routers.role_requests import relay_router as role_request_relay_router
from goup.api.routers.role_requests import router as role_requests_router
from goup.api.routers.submit import router as submit_router
from goup.api.routers.wizards import router as wizards_router
from goup.db.init_db import init_db
from goup.db.session import create_engine, create_sessionmaker
from goup.documents.store import create_document_store
from goup.media.storage import create_media_storage
from goup.observability.logging import configure_logging, get_logger
from goup.observability.middleware import RequestContextMiddleware
from goup.settings import Settings, get_settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    `http_transport` replaces the network for outbound provider calls (tests pass an
    `httpx.MockTransport`).
    """

    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name, level=settings.log_level, json=settings.log_json
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # Shared infrastructure lives on app.state; routers reach it via `goup.api.deps`.
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await init_db(engine)

        app.state.documents = create_document_store(settings)
        app.state.media = create_media_storage(settings)
        app.state.http = httpx.AsyncClient(
            transport=http_transport, timeout=settings.http_timeout_seconds
        )
        try:
            yield
        finally:
            await app.state.http.aclose()
            await app.state.documents.close()
            # Dispose the engine to close pools/FDs gracefully.
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="GoUp API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(RequestContextMiddleware)
    install_error_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(me_router)
    app.include_router(role_requests_router)
    app.include_router(role_request_relay_router)
    app.include_router(admin_router)
    app.include_router(wizards_router)
    app.include_router(clubs_router)
    app.include_router(producers_router)
    app.include_router(events_router)
    app.include_router(submit_router)
    app.include_router(hooks_router)

    # Serves uploads under `media_base_url` when it points back at this app.
    app.mount("/media", StaticFiles(directory=settings.media_root, check_dir=False), name="media")
    return app


# --- Module Notes -----------------------------------------------------------
# This file stays small: app composition lives here; business rules live in services.
