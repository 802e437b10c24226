"""
goup.api.routers.wizards

Step descriptors and per-step validation gates for the creation wizards.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from goup.errors import NotFoundError
from goup.forms.definitions import WIZARDS
from goup.forms.wizard import Wizard

router = APIRouter(prefix="/v1/wizards", tags=["wizards"])


def _wizard(name: str) -> Wizard:
    wizard = WIZARDS.get(name)
    if wizard is None:
        raise NotFoundError("Formulario no encontrado")
    return wizard


@router.get("/{name}")
async def describe_wizard(name: str) -> dict[str, Any]:
    return _wizard(name).describe()


@router.post("/{name}/steps/{index}")
async def advance_step(name: str, index: int, values: dict[str, Any]) -> dict[str, Any]:
    wizard = _wizard(name)
    if wizard.is_terminal(index):
        # Last step: the whole record must be valid before it can be submitted.
        wizard.submit(values)
        return {"next": wizard.last, "complete": True}
    return {"next": wizard.advance(index, values), "complete": False}
