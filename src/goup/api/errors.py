"""
goup.api.errors

Global error handlers ensuring request_id is included in JSON responses.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_422_UNPROCESSABLE_CONTENT, HTTP_500_INTERNAL_SERVER_ERROR

from goup.errors import FormValidationError, GoUpError
from goup.forms.wizard import StepBlocked
from goup.observability.logging import get_logger
from goup.observability.middleware import get_request_id

log = get_logger(__name__)

INTERNAL_ERROR = "Error interno"


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(GoUpError)
    async def goup_exc_handler(request: Request, exc: GoUpError):  # type: ignore[override]
        payload: dict[str, Any] = {"detail": exc.detail, "request_id": get_request_id(request)}
        if isinstance(exc, FormValidationError):
            payload["issues"] = exc.issues
        if isinstance(exc, StepBlocked):
            payload["step"] = exc.step
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
        payload = {"detail": exc.detail, "request_id": get_request_id(request)}
        return JSONResponse(
            status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        payload = {
            "detail": "validation_error",
            "errors": jsonable_encoder(exc.errors()),
            "request_id": get_request_id(request),
        }
        return JSONResponse(status_code=HTTP_422_UNPROCESSABLE_CONTENT, content=payload)

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):  # type: ignore[override]
        log.exception("unhandled_error", error=str(exc))
        payload = {"detail": INTERNAL_ERROR, "request_id": get_request_id(request)}
        return JSONResponse(status_code=HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
