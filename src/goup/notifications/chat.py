"""
goup.notifications.chat

Slack-compatible incoming webhook.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from goup.observability.logging import get_logger

log = get_logger(__name__)


def submission_text(kind: str, data: dict[str, Any]) -> str:
    return f"Nuevo registro ({kind}):\n```{json.dumps(data, indent=2, ensure_ascii=False)}```"


class ChatWebhook:
    def __init__(self, *, url: str, http: httpx.AsyncClient) -> None:
        self._url = url
        self._http = http

    async def post_text(self, text: str) -> None:
        r = await self._http.post(self._url, json={"text": text})
        if r.is_error:
            # The caller already accepted the submission; a rejected post is only logged.
            log.warning("chat_webhook_rejected", status=r.status_code)
