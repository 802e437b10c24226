from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from goup.api.deps import db_session, decode_form_data, media_storage
from goup.auth.deps import require_roles
from goup.auth.guards import PRODUCER_ROLES
from goup.db.models import User
from goup.forms.errors import validate_form
from goup.forms.schemas import ProducerForm
from goup.media.storage import MediaStorage
from goup.services.producers import ProducerService, producer_view

router = APIRouter(prefix="/v1/producers", tags=["producers"])


def _service(
    session: AsyncSession = Depends(db_session),
    media: MediaStorage = Depends(media_storage),
) -> ProducerService:
    return ProducerService(session=session, media=media)


@router.post("", status_code=HTTP_201_CREATED)
async def create_producer(
    data: str = Form("{}"),
    imagen: UploadFile | None = File(None),
    user: User = Depends(require_roles(*PRODUCER_ROLES)),
    svc: ProducerService = Depends(_service),
) -> dict[str, Any]:
    form = validate_form(ProducerForm, decode_form_data(data))
    return producer_view(await svc.create(user, form, imagen=imagen))


@router.get("/mine")
async def my_producer(
    user: User = Depends(require_roles(*PRODUCER_ROLES)),
    svc: ProducerService = Depends(_service),
) -> dict[str, Any]:
    return producer_view(await svc.mine(user))


@router.put("/mine")
async def update_producer(
    data: str = Form("{}"),
    imagen: UploadFile | None = File(None),
    user: User = Depends(require_roles(*PRODUCER_ROLES)),
    svc: ProducerService = Depends(_service),
) -> dict[str, Any]:
    form = validate_form(ProducerForm, decode_form_data(data))
    return producer_view(await svc.update(user, form, imagen=imagen))
