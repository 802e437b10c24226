"""
goup.forms.fields

Reusable annotated field types with user-facing (Spanish) error messages.

Each factory returns a `BeforeValidator` so missing values (defaulted to "" or None
with `validate_default=True`) produce the form message instead of pydantic's
generic "Field required".
"""

from __future__ import annotations

import math
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import BeforeValidator, HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

_URL = TypeAdapter(HttpUrl)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def min_text(min_length: int, message: str) -> BeforeValidator:
    def check(value: Any) -> str:
        text = _text(value)
        if len(text) < min_length:
            raise PydanticCustomError("too_short", message)
        return text

    return BeforeValidator(check)


def optional_text() -> BeforeValidator:
    def check(value: Any) -> str | None:
        return None if value is None else _text(value)

    return BeforeValidator(check)


def email(message: str, *, allow_empty: bool = False) -> BeforeValidator:
    def check(value: Any) -> str | None:
        text = _text(value).strip()
        if not text and allow_empty:
            return "" if value is not None else None
        try:
            validate_email(text, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("email", message) from None
        return text

    return BeforeValidator(check)


def url_or_empty(message: str) -> BeforeValidator:
    def check(value: Any) -> str | None:
        if value is None:
            return None
        text = _text(value).strip()
        if not text:
            return ""
        try:
            _URL.validate_python(text)
        except PydanticValidationError:
            raise PydanticCustomError("url", message) from None
        return text

    return BeforeValidator(check)


def coerced_int(
    message: str,
    *,
    minimum: int | None = None,
    maximum: int | None = None,
    optional: bool = False,
) -> BeforeValidator:
    """
    Number inputs arrive as strings. Blank optional values become None; anything
    non-integral or outside the bounds fails with `message`.
    """

    def check(value: Any) -> int | None:
        if optional and (value is None or (isinstance(value, str) and not value.strip())):
            return None
        if isinstance(value, bool):
            raise PydanticCustomError("int", message)
        try:
            number = float(_text(value).strip() or "0")
        except ValueError:
            raise PydanticCustomError("int", message) from None
        if not math.isfinite(number) or not number.is_integer():
            raise PydanticCustomError("int", message)
        result = int(number)
        if minimum is not None and result < minimum:
            raise PydanticCustomError("too_small", message)
        if maximum is not None and result > maximum:
            raise PydanticCustomError("too_big", message)
        return result

    return BeforeValidator(check)


def optional_float() -> BeforeValidator:
    def check(value: Any) -> float | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return number if math.isfinite(number) else None

    return BeforeValidator(check)


def yes_no_value() -> BeforeValidator:
    """Accepts a bool or the select literals "Sí"/"No"; anything else counts as "No"."""

    def check(value: Any) -> bool | str:
        if isinstance(value, bool):
            return value
        text = _text(value)
        return text if text in ("Sí", "No") else "No"

    return BeforeValidator(check)


def loose_flag() -> BeforeValidator:
    # bool or free string (edit forms keep whatever the select sent).
    def check(value: Any) -> bool | str:
        if isinstance(value, bool):
            return value
        return _text(value) or "No"

    return BeforeValidator(check)


def string_list(message: str = "Selección inválida") -> BeforeValidator:
    def check(value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if not isinstance(value, (list, tuple)):
            raise PydanticCustomError("list_type", message)
        return [_text(v) for v in value]

    return BeforeValidator(check)


def choice(options: tuple[str, ...], message: str) -> BeforeValidator:
    def check(value: Any) -> str:
        text = _text(value)
        if text not in options:
            raise PydanticCustomError("choice", message)
        return text

    return BeforeValidator(check)
