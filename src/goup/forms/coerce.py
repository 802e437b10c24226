"""
goup.forms.coerce

Loose value coercions for select/yes-no inputs.

Form selects submit strings ("Sí", "No", "2", "Más de 5"); stored documents use
booleans and ints.
"""

from __future__ import annotations

import math
from typing import Any

_TRUTHY = frozenset({"si", "sí", "true", "1"})


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def as_int(value: Any, fallback: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return int(number)


def vip_to_count(value: Any) -> int:
    text = "" if value is None else str(value).strip()
    if text.lower() in ("no", "", "0"):
        return 0
    # "Más de 5" is the open-ended option.
    if "más de" in text.lower():
        return 6
    return as_int(text, 0)


def vip_to_bool(value: Any) -> bool:
    return vip_to_count(value) > 0


def yes_no(value: Any) -> bool:
    """Amenity selects: `True` or the literal "Sí" count as yes."""

    return value is True or value == "Sí"


def blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value or None
