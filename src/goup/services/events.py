"""
goup.services.events

Event creation and management (document store).

Responsibilities:
- Validate the full event wizard record and build the stored document
  (genres, lineup, VIP and reservation coercions).
- Upload the flyer and secondary image before writing the document.
- Owner listings, edits and the public listing.
"""

from __future__ import annotations

from typing import Any

from fastapi import UploadFile
from pymongo.errors import PyMongoError

from goup.auth.guards import has_any_role
from goup.db.models import Role, User
from goup.documents.events import EventRepo, owner_ref
from goup.documents.store import Document, DocumentStore, iso_now
from goup.errors import ForbiddenError, NotFoundError
from goup.forms.coerce import as_bool, as_int, vip_to_bool, vip_to_count
from goup.forms.definitions import EVENT_WIZARD
from goup.forms.errors import validate_form
from goup.forms.schemas import EventEditForm, EventForm
from goup.media.storage import MediaStorage, event_key, upload_optional
from goup.observability.logging import get_logger

log = get_logger(__name__)

OTHER_GENRE = "Otros"
DEFAULT_MIN_AGE = 18


def final_genres(generos: list[str], otro: str | None) -> list[str]:
    """Replaces "Otros" with the free-text genre when one was given."""

    custom = (otro or "").strip()
    if OTHER_GENRE in generos and custom:
        return [g for g in generos if g != OTHER_GENRE] + [custom]
    return list(generos)


def clean_djs(djs: list[str]) -> list[str]:
    return [name for name in (str(dj or "").strip() for dj in djs) if name]


def event_fields(form: EventForm) -> Document:
    djs = clean_djs(form.djs)
    return {
        "nombre": form.nombre,
        "tipo": form.tipo,
        "fecha": form.fecha,
        "horaInicio": form.horaInicio,
        "horaCierre": form.horaCierre,
        "capacidad": form.capacidad,
        "presupuesto": form.presupuesto,
        "promotor": form.promotor,
        "telefono": form.telefono,
        "email": form.email,
        "desc": form.desc,
        "generos": final_genres(form.generos, form.generosOtro),
        "edad": as_int(form.edad, DEFAULT_MIN_AGE),
        "dress_code": form.dress_code,
        "tieneVip": vip_to_bool(form.tieneVip),
        "cantidadZonasVip": vip_to_count(form.tieneVip),
        "aceptaReservas": as_bool(form.reservas),
        "tieneLineup": as_bool(form.tieneLineup),
        "cantidadDJs": len(djs),
        "djs": djs,
    }


def build_event_document(
    form: EventForm, *, owner_uid: str, flyer: str | None, img_sec: str | None
) -> Document:
    return {
        **event_fields(form),
        "flyer": flyer,
        "imgSec": img_sec,
        "uid_usersWeb": owner_ref(owner_uid),
        "createdAt": iso_now(),
    }


class EventService:
    def __init__(self, *, store: DocumentStore, media: MediaStorage) -> None:
        self._events = EventRepo(store)
        self._media = media

    async def create(
        self,
        user: User,
        values: dict[str, Any],
        *,
        flyer: UploadFile | None = None,
        img_sec: UploadFile | None = None,
    ) -> Document:
        form = EVENT_WIZARD.submit(values)
        uid = user.auth_subject

        flyer_url = await upload_optional(
            self._media, flyer, event_key(uid, "flyer", flyer.filename if flyer else None)
        )
        img_sec_url = await upload_optional(
            self._media, img_sec, event_key(uid, "imgSec", img_sec.filename if img_sec else None)
        )

        doc = build_event_document(form, owner_uid=uid, flyer=flyer_url, img_sec=img_sec_url)
        doc["id"] = await self._events.create(doc)
        log.info("event_created", uid=uid, event_id=doc["id"])
        return doc

    async def mine(self, user: User) -> list[Document]:
        return await self._events.list_for_owner(user.auth_subject)

    async def get(self, event_id: str) -> Document:
        event = await self._events.get(event_id)
        if event is None:
            raise NotFoundError("Evento no encontrado")
        return event

    async def update(
        self,
        user: User,
        event_id: str,
        values: dict[str, Any],
        *,
        flyer: UploadFile | None = None,
        img_sec: UploadFile | None = None,
    ) -> Document:
        event = await self.get(event_id)
        owned = event.get("uid_usersWeb") == owner_ref(user.auth_subject)
        if not owned and not has_any_role(user, (Role.admin,)):
            raise ForbiddenError("No puedes editar este evento")

        form = validate_form(EventEditForm, values)
        fields = event_fields(form)
        # A new file replaces the stored URL; without one the current image stays.
        uid = user.auth_subject
        fields["flyer"] = await upload_optional(
            self._media, flyer, event_key(uid, "flyer", flyer.filename if flyer else None)
        ) or event.get("flyer")
        fields["imgSec"] = await upload_optional(
            self._media, img_sec, event_key(uid, "imgSec", img_sec.filename if img_sec else None)
        ) or event.get("imgSec")

        await self._events.update(event_id, fields)
        log.info("event_updated", uid=uid, event_id=event_id)
        return {**event, **fields}

    async def list_public(self) -> list[Document]:
        try:
            return await self._events.list_all()
        except PyMongoError:
            log.exception("event_listing_failed")
            return []
