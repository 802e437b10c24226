"""
goup.api.routers.clubs

Club endpoints (document store).

Responsibilities:
- Create a club from the wizard record plus image uploads (multipart).
- Owner check (`/mine`), detail, edit and the public listing.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.status import HTTP_201_CREATED

from goup.api.deps import decode_form_data, document_store, media_storage
from goup.auth.deps import require_roles
from goup.auth.guards import CLUB_ROLES
from goup.db.models import User
from goup.documents.store import Document, DocumentStore
from goup.media.storage import MediaStorage
from goup.services.clubs import ClubService

router = APIRouter(prefix="/v1/clubs", tags=["clubs"])


def _service(
    store: DocumentStore = Depends(document_store),
    media: MediaStorage = Depends(media_storage),
) -> ClubService:
    return ClubService(store=store, media=media)


@router.post("", status_code=HTTP_201_CREATED)
async def create_club(
    data: str = Form("{}"),
    imagen: UploadFile | None = File(None),
    banner: UploadFile | None = File(None),
    user: User = Depends(require_roles(*CLUB_ROLES)),
    svc: ClubService = Depends(_service),
) -> Document:
    return await svc.create(user, decode_form_data(data), imagen=imagen, banner=banner)


@router.get("/mine")
async def my_club(
    user: User = Depends(require_roles(*CLUB_ROLES)),
    svc: ClubService = Depends(_service),
) -> dict[str, Any]:
    return await svc.mine(user)


@router.get("")
async def list_clubs(svc: ClubService = Depends(_service)) -> list[Document]:
    return await svc.list_all()


@router.get("/{club_id}")
async def get_club(club_id: str, svc: ClubService = Depends(_service)) -> Document:
    return await svc.get(club_id)


@router.put("/{club_id}")
async def update_club(
    club_id: str,
    data: str = Form("{}"),
    imagen: UploadFile | None = File(None),
    banner: UploadFile | None = File(None),
    user: User = Depends(require_roles(*CLUB_ROLES)),
    svc: ClubService = Depends(_service),
) -> Document:
    return await svc.update(user, club_id, decode_form_data(data), imagen=imagen, banner=banner)
