"""
goup.forms.errors

Flatten pydantic validation errors into dotted field paths.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from goup.errors import FormValidationError

FormT = TypeVar("FormT", bound=BaseModel)


def loc_to_path(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def flatten_errors(exc: ValidationError) -> dict[str, str]:
    """First message per dotted path, in the order pydantic reported them."""

    out: dict[str, str] = {}
    for err in exc.errors():
        path = loc_to_path(err["loc"])
        out.setdefault(path, err["msg"])
    return out


def collect_step_errors(flat: dict[str, str], fields: list[str] | tuple[str, ...]) -> list[dict[str, Any]]:
    """
    Issues for the given fields only, ordered by `fields`.

    A field also matches nested paths (`djs` matches `djs.0`, `servicios` matches
    `servicios.wifi`).
    """

    issues: list[dict[str, Any]] = []
    for field in fields:
        for path, message in flat.items():
            if path == field or path.startswith(f"{field}."):
                issues.append({"field": path, "message": message})
    return issues


def issues_from(exc: ValidationError) -> list[dict[str, Any]]:
    return [{"field": path, "message": msg} for path, msg in flatten_errors(exc).items()]


def submission_issues(exc: ValidationError) -> list[dict[str, Any]]:
    # Shape of the generic submit endpoint: path segments, message, error code.
    return [
        {"path": list(err["loc"]), "message": err["msg"], "code": err["type"]}
        for err in exc.errors()
    ]


def validate_form(schema: type[FormT], values: Any) -> FormT:
    try:
        return schema.model_validate(values)
    except ValidationError as exc:
        raise FormValidationError(issues_from(exc)) from exc
