"""
goup.observability.logging

Structured logging configuration for the service.

Responsibilities:
- Configure `structlog` once per process: JSON lines in deployed envs, a readable
  console renderer when `log_json` is off.
- Mask provider credentials that may end up in event fields.
- Quiet chatty client libraries whose request lines would print webhook URLs.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from typing import Any

import structlog

SENSITIVE_KEYS = frozenset({"authorization", "api_key", "token", "secret", "webhook_url"})
MASK = "***"

# httpx logs full request URLs at INFO; a Slack webhook URL is itself a credential.
_NOISY_LOGGERS = ("httpx", "httpcore", "pymongo", "aiosqlite")


def configure_logging(*, service_name: str, level: str, json: bool = True) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    renderer: Any = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _static_fields(service=service_name),
            _mask(SENSITIVE_KEYS),
            structlog.processors.dict_tracebacks,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _static_fields(**fields: Any):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def _mask(keys: Iterable[str]):
    masked = frozenset(keys)

    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key in masked.intersection(event_dict):
            if event_dict[key]:
                event_dict[key] = MASK
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request-scoped metadata is bound via contextvars in `observability.middleware`.
# `ensure_ascii=False` keeps the Spanish user-facing messages readable in log lines.
