"""
goup.services.profile

Signed-in user's own profile.

Responsibilities:
- Profile view and update (empty optional fields are stored as null).
- Avatar upload with a cache-busting URL.
- Event statistics (created vs already happened).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from goup.auth.guards import home_for
from goup.db.models import User
from goup.db.repositories.users import UserRepo
from goup.documents.store import Document
from goup.forms.coerce import blank_to_none
from goup.forms.schemas import ProfileForm
from goup.media.storage import MediaStorage, avatar_key, check_avatar, now_ms
from goup.observability.logging import get_logger

log = get_logger(__name__)


def profile_view(user: User) -> dict[str, Any]:
    return {
        "uid": user.auth_subject,
        "email": user.email,
        "nombre": user.name,
        "telefono": user.phone,
        "rut": user.rut,
        "direccion": user.address,
        "foto": user.photo,
        "sexo": user.sex,
        "fecha_nacimiento": user.birth_date,
        "rol": user.role,
        "rol_extra": user.role_extra,
        "can_create_event": user.can_create_event,
        "is_active": user.is_active,
        "home": home_for(user),
    }


def event_moment(event: Document) -> datetime | None:
    """Close time, else start time, else midnight of the event date."""

    base = event.get("horaCierre") or event.get("horaInicio") or "00:00"
    try:
        return datetime.fromisoformat(f"{event.get('fecha')}T{base}")
    except ValueError:
        return None


def event_stats(events: Iterable[Document], *, now: datetime | None = None) -> dict[str, int]:
    current = now or datetime.now()
    listed = list(events)
    past = 0
    for ev in listed:
        moment = event_moment(ev)
        if moment is not None and current > moment:
            past += 1
    return {"total": len(listed), "realizados": past, "futuros": max(0, len(listed) - past)}


class ProfileService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._users = UserRepo(session)

    async def update(self, user: User, form: ProfileForm) -> User:
        updated = await self._users.update(
            user.id,
            name=form.nombre,
            phone=blank_to_none(form.telefono),
            rut=blank_to_none(form.rut),
            address=blank_to_none(form.direccion),
        )
        await self._session.commit()
        log.info("profile_updated", uid=user.auth_subject)
        return updated or user

    async def set_avatar(
        self,
        user: User,
        *,
        media: MediaStorage,
        filename: str | None,
        content_type: str | None,
        data: bytes,
        max_bytes: int,
    ) -> str:
        check_avatar(content_type, len(data), max_bytes=max_bytes)
        url = await media.save(avatar_key(user.auth_subject, filename), data)
        photo = f"{url}?v={now_ms()}"
        await self._users.update(user.id, photo=photo)
        await self._session.commit()
        log.info("avatar_updated", uid=user.auth_subject)
        return photo
