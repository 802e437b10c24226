"""
goup.errors

Domain exceptions raised by services and rendered by the API layer.

Responsibilities:
- Carry an HTTP status and a user-facing message (the text a UI shows in a toast).
- Carry field-level issues for form validation failures.
"""

from __future__ import annotations

from typing import Any

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_502_BAD_GATEWAY,
)


class GoUpError(Exception):
    """Base class for errors surfaced to the caller as JSON."""

    status_code: int = HTTP_400_BAD_REQUEST
    detail: str = "Error inesperado"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class NotFoundError(GoUpError):
    status_code = HTTP_404_NOT_FOUND
    detail = "No encontrado"


class ForbiddenError(GoUpError):
    status_code = HTTP_403_FORBIDDEN
    detail = "No autorizado"


class ConflictError(GoUpError):
    """Raised when a one-per-user entity already exists."""

    status_code = HTTP_409_CONFLICT
    detail = "Ya existe"


class FormValidationError(GoUpError):
    """
    Raised when a form (or one wizard step) fails schema validation.

    `issues` is ordered by the form's field order; the first message is the one
    a UI displays as the toast.
    """

    status_code = HTTP_422_UNPROCESSABLE_CONTENT
    detail = "Corrige los campos para continuar."

    def __init__(self, issues: list[dict[str, Any]], detail: str | None = None) -> None:
        super().__init__(detail or (issues[0]["message"] if issues else None))
        self.issues = issues

    @property
    def messages(self) -> list[str]:
        return [i["message"] for i in self.issues]


class UpstreamError(GoUpError):
    """An outbound provider (email, webhook) rejected the call."""

    status_code = HTTP_502_BAD_GATEWAY
    detail = "Proveedor externo falló"

    def __init__(self, detail: str | None = None, *, upstream_body: str | None = None) -> None:
        super().__init__(detail)
        self.upstream_body = upstream_body


# --- Module Notes -----------------------------------------------------------
# Authn/authz failures inside FastAPI dependencies still use HTTPException directly.
