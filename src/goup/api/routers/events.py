"""
goup.api.routers.events

Event endpoints (document store).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.status import HTTP_201_CREATED

from goup.api.deps import decode_form_data, document_store, media_storage
from goup.auth.deps import require_roles
from goup.auth.guards import EVENT_ROLES
from goup.db.models import User
from goup.documents.store import Document, DocumentStore
from goup.media.storage import MediaStorage
from goup.services.events import EventService

router = APIRouter(prefix="/v1/events", tags=["events"])


def _service(
    store: DocumentStore = Depends(document_store),
    media: MediaStorage = Depends(media_storage),
) -> EventService:
    return EventService(store=store, media=media)


@router.post("", status_code=HTTP_201_CREATED)
async def create_event(
    data: str = Form("{}"),
    flyer: UploadFile | None = File(None),
    img_sec: UploadFile | None = File(None, alias="imgSec"),
    user: User = Depends(require_roles(*EVENT_ROLES)),
    svc: EventService = Depends(_service),
) -> Document:
    return await svc.create(user, decode_form_data(data), flyer=flyer, img_sec=img_sec)


@router.get("/mine")
async def my_events(
    user: User = Depends(require_roles(*EVENT_ROLES)),
    svc: EventService = Depends(_service),
) -> list[Document]:
    return await svc.mine(user)


@router.get("")
async def list_events(svc: EventService = Depends(_service)) -> list[Document]:
    return await svc.list_public()


@router.get("/{event_id}")
async def get_event(event_id: str, svc: EventService = Depends(_service)) -> Document:
    return await svc.get(event_id)


@router.put("/{event_id}")
async def update_event(
    event_id: str,
    data: str = Form("{}"),
    flyer: UploadFile | None = File(None),
    img_sec: UploadFile | None = File(None, alias="imgSec"),
    user: User = Depends(require_roles(*EVENT_ROLES)),
    svc: EventService = Depends(_service),
) -> Document:
    return await svc.update(user, event_id, decode_form_data(data), flyer=flyer, img_sec=img_sec)
