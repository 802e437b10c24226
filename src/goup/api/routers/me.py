"""
goup.api.routers.me

Signed-in user's own record.

Responsibilities:
- Current user, post-login destination and profile edits.
- Avatar upload.
- Event statistics for the profile page.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from goup.api.deps import db_session, document_store, media_storage
from goup.auth.deps import active_user
from goup.auth.guards import home_for, needs_onboarding
from goup.db.models import User
from goup.documents.events import EventRepo
from goup.documents.store import DocumentStore
from goup.forms.errors import validate_form
from goup.forms.schemas import ProfileForm
from goup.media.storage import MediaStorage
from goup.services.profile import ProfileService, event_stats, profile_view
from goup.settings import Settings, get_settings

router = APIRouter(prefix="/v1/me", tags=["me"])


@router.get("")
async def get_me(user: User = Depends(active_user)) -> dict[str, Any]:
    return profile_view(user)


@router.get("/home")
async def get_home(user: User = Depends(active_user)) -> dict[str, Any]:
    return {"redirect": home_for(user), "needs_onboarding": needs_onboarding(user)}


@router.get("/profile")
async def get_profile(user: User = Depends(active_user)) -> dict[str, Any]:
    return profile_view(user)


@router.put("/profile")
async def put_profile(
    body: dict[str, Any],
    user: User = Depends(active_user),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    form = validate_form(ProfileForm, body)
    updated = await ProfileService(session=session).update(user, form)
    return profile_view(updated)


@router.post("/avatar")
async def post_avatar(
    file: UploadFile = File(...),
    user: User = Depends(active_user),
    session: AsyncSession = Depends(db_session),
    media: MediaStorage = Depends(media_storage),
    settings: Settings = Depends(get_settings),
) -> dict[str, str]:
    photo = await ProfileService(session=session).set_avatar(
        user,
        media=media,
        filename=file.filename,
        content_type=file.content_type,
        data=await file.read(),
        max_bytes=settings.avatar_max_bytes,
    )
    return {"foto": photo}


@router.get("/stats")
async def get_stats(
    user: User = Depends(active_user),
    documents: DocumentStore = Depends(document_store),
) -> dict[str, int]:
    events = await EventRepo(documents).list_for_owner(user.auth_subject)
    return event_stats(events)
