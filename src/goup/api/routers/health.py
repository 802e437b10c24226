"""
goup.api.routers.health

Liveness and readiness probes.

`/readyz` checks both stores and answers 503 with the failing check named, so the
load balancer drains an instance that lost either backend.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from goup.api.deps import db_session, document_store
from goup.documents.store import DocumentStore
from goup.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    session: AsyncSession = Depends(db_session),
    documents: DocumentStore = Depends(document_store),
) -> JSONResponse:
    checks: dict[str, str] = {}
    try:
        await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except SQLAlchemyError:
        log.exception("readiness_database_failed")
        checks["database"] = "error"
    try:
        await documents.ping()
        checks["documents"] = "ok"
    except PyMongoError:
        log.exception("readiness_documents_failed")
        checks["documents"] = "error"

    ready = all(v == "ok" for v in checks.values())
    return JSONResponse(
        status_code=HTTP_200_OK if ready else HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )
