"""
goup.forms.wizard

Multi-step form (wizard) with per-step validation gating.

Responsibilities:
- Describe the steps of a form: icon, title and the fields each step owns.
- Clamp navigation (next / prev / go_to) to the step range.
- Validate only the current step's fields before advancing; the first failing
  message is the one shown to the user.
- Validate the whole record on the terminal step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from goup.errors import FormValidationError
from goup.forms.errors import collect_step_errors, flatten_errors, validate_form

FormT = TypeVar("FormT", bound=BaseModel)

STEP_FALLBACK_MESSAGE = "Corrige los campos para continuar."


@dataclass(frozen=True, slots=True)
class StepField:
    name: str
    label: str
    kind: str = "text"
    options: tuple[str, ...] = ()
    # Rendered only while another field holds (or, for lists, contains) a value.
    show_when: tuple[str, str] | None = None
    # Repeated inputs bound to `name.0`, `name.1`, ...
    repeat: int | None = None

    def visible(self, values: dict[str, Any]) -> bool:
        if self.show_when is None:
            return True
        other, expected = self.show_when
        current = values.get(other)
        if isinstance(current, (list, tuple)):
            return expected in current
        return current == expected

    def describe(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "label": self.label, "kind": self.kind}
        if self.options:
            out["options"] = list(self.options)
        if self.show_when is not None:
            out["show_when"] = {"field": self.show_when[0], "value": self.show_when[1]}
        if self.repeat is not None:
            out["repeat"] = self.repeat
        return out


@dataclass(frozen=True, slots=True)
class Step:
    icon: str
    title: str
    fields: tuple[StepField, ...] = field(default_factory=tuple)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)


class StepBlocked(FormValidationError):
    """Advancing was refused because the current step has invalid fields."""

    def __init__(self, step: int, issues: list[dict[str, Any]]) -> None:
        super().__init__(issues, detail=issues[0]["message"] if issues else STEP_FALLBACK_MESSAGE)
        self.step = step


class Wizard(Generic[FormT]):
    def __init__(self, *, name: str, schema: type[FormT], steps: list[Step]) -> None:
        if not steps:
            raise ValueError("a wizard needs at least one step")
        self.name = name
        self.schema = schema
        self.steps = tuple(steps)

    @property
    def total(self) -> int:
        return len(self.steps)

    @property
    def last(self) -> int:
        return self.total - 1

    def clamp(self, index: int) -> int:
        return max(0, min(index, self.last))

    def next_index(self, current: int) -> int:
        return self.clamp(current + 1)

    def prev_index(self, current: int) -> int:
        return self.clamp(current - 1)

    def go_to(self, index: int) -> int:
        return self.clamp(index)

    def is_terminal(self, index: int) -> bool:
        return self.clamp(index) == self.last

    def validate_step(self, index: int, values: dict[str, Any]) -> list[dict[str, Any]]:
        """Issues for the fields owned by step `index`; other steps' errors are ignored."""

        step = self.steps[self.clamp(index)]
        try:
            self.schema.model_validate(values)
        except ValidationError as exc:
            return collect_step_errors(flatten_errors(exc), step.field_names)
        return []

    def advance(self, current: int, values: dict[str, Any]) -> int:
        current = self.clamp(current)
        issues = self.validate_step(current, values)
        if issues:
            raise StepBlocked(current, issues)
        return self.next_index(current)

    def submit(self, values: dict[str, Any]) -> FormT:
        return validate_form(self.schema, values)

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "total": self.total,
            "steps": [
                {
                    "index": i,
                    "icon": s.icon,
                    "title": s.title,
                    "fields": [f.describe() for f in s.fields],
                }
                for i, s in enumerate(self.steps)
            ],
        }


# --- Module Notes -----------------------------------------------------------
# The wizard is stateless: the client keeps the current index and the values and
# asks the server to gate each transition (`api.routers.wizards`).
