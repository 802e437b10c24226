"""
goup.services.submissions

Generic entity submission (club / producer / event) with chat notification.

Responsibilities:
- Check the `{type, payload}` envelope and pick the schema for `type`.
- Validate the payload and report issues with path/message/code.
- Post the accepted record to the chat webhook when one is configured.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from starlette.status import HTTP_400_BAD_REQUEST

from goup.errors import GoUpError
from goup.forms.errors import submission_issues
from goup.forms.schemas import SUBMISSION_SCHEMAS
from goup.notifications.chat import ChatWebhook, submission_text
from goup.observability.logging import get_logger

log = get_logger(__name__)

BAD_ENVELOPE = "Formato inválido"
UNSUPPORTED_TYPE = "Tipo no soportado"
VALIDATION_FAILED = "Validación falló"


class SubmissionRejected(GoUpError):
    status_code = HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, issues: list[dict[str, Any]] | None = None) -> None:
        super().__init__(detail)
        self.issues = issues


def _missing(value: Any) -> bool:
    # Falsy scalars count as missing; an empty object or list does not.
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0
    return False


def parse_submission(body: Any) -> tuple[str, dict[str, Any]]:
    if not isinstance(body, dict) or _missing(body.get("type")) or _missing(body.get("payload")):
        raise SubmissionRejected(BAD_ENVELOPE)

    kind = body["type"]
    schema = SUBMISSION_SCHEMAS.get(kind) if isinstance(kind, str) else None
    if schema is None:
        raise SubmissionRejected(UNSUPPORTED_TYPE)

    try:
        record = schema.model_validate(body["payload"])
    except ValidationError as exc:
        raise SubmissionRejected(VALIDATION_FAILED, submission_issues(exc)) from exc
    return kind, record.model_dump(mode="json")


async def submit(body: Any, *, chat: ChatWebhook | None) -> None:
    kind, data = parse_submission(body)
    log.info("submission_received", type=kind, data=data)
    if chat is not None:
        await chat.post_text(submission_text(kind, data))
