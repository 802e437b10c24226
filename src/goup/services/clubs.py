"""
goup.services.clubs

Club creation and management (document store).

Responsibilities:
- Validate the full club wizard record and build the stored document.
- Enforce one club per owner (read-before-write; not transactional).
- Upload the main image and banner before writing the document.
"""

from __future__ import annotations

from typing import Any

from fastapi import UploadFile

from goup.auth.guards import has_any_role
from goup.db.models import Role, User
from goup.documents.clubs import ClubRepo
from goup.documents.store import Document, DocumentStore, iso_now
from goup.errors import ConflictError, ForbiddenError, NotFoundError
from goup.forms.coerce import as_int, blank_to_none, yes_no
from goup.forms.definitions import CLUB_WIZARD
from goup.forms.errors import validate_form
from goup.forms.schemas import ClubEditForm, ClubForm
from goup.media.storage import MediaStorage, club_key, now_ms, upload_optional
from goup.observability.logging import get_logger

log = get_logger(__name__)

CLUB_EXISTS = "Ya tienes un club creado."
AMENITIES = ("accesibilidad", "estacionamientos", "guardaropia", "terraza", "fumadores", "wifi")


def club_fields(form: ClubForm) -> Document:
    """Editable part of a club document, with selects coerced to stored types."""

    fields: Document = {
        "nombre": form.nombre,
        "descripcion": form.descripcion,
        "direccion": form.direccion,
        "ciudad": form.ciudad,
        "pais": form.pais,
        "latitud": form.latitud,
        "longitud": form.longitud,
        "telefono": form.telefono or None,
        "email": form.email or None,
        "sitio_web": form.sitio_web or None,
        "instagram": form.instagram or None,
        "ambientes": as_int(form.ambientes, 0),
        "banos": as_int(form.banos, 0),
    }
    for name in AMENITIES:
        fields[name] = yes_no(getattr(form, name))
    return fields


# Optional text the edit form may blank out; stored as null like the other optionals.
_EDIT_NULLABLE = ("descripcion", "direccion", "ciudad", "pais")


def club_edit_fields(form: ClubEditForm) -> Document:
    fields = club_fields(form)
    for name in _EDIT_NULLABLE:
        fields[name] = blank_to_none(fields[name])
    fields["ambientes"] = form.ambientes
    fields["banos"] = form.banos
    return fields


def build_club_document(
    form: ClubForm, *, owner_uid: str, imagen: str | None, banner: str | None
) -> Document:
    return {
        "id_club": now_ms(),
        "uid_usersWeb": owner_uid,
        **club_fields(form),
        "imagen": imagen,
        "banner": banner,
        "seguidores": 0,
        "seguridad": False,
        "createdAt": iso_now(),
    }


class ClubService:
    def __init__(self, *, store: DocumentStore, media: MediaStorage) -> None:
        self._clubs = ClubRepo(store)
        self._media = media

    async def create(
        self,
        user: User,
        values: dict[str, Any],
        *,
        imagen: UploadFile | None = None,
        banner: UploadFile | None = None,
    ) -> Document:
        form = CLUB_WIZARD.submit(values)
        uid = user.auth_subject

        if await self._clubs.first_for_owner(uid) is not None:
            raise ConflictError(CLUB_EXISTS)

        imagen_url = await upload_optional(
            self._media, imagen, club_key(uid, "imagen", imagen.filename if imagen else None)
        )
        banner_url = await upload_optional(
            self._media, banner, club_key(uid, "banner", banner.filename if banner else None)
        )

        doc = build_club_document(form, owner_uid=uid, imagen=imagen_url, banner=banner_url)
        doc["id"] = await self._clubs.create(doc)
        log.info("club_created", uid=uid, club_id=doc["id"])
        return doc

    async def mine(self, user: User) -> dict[str, Any]:
        club = await self._clubs.first_for_owner(user.auth_subject)
        return {"has_club": club is not None, "club_id": club["id"] if club else None}

    async def get(self, club_id: str) -> Document:
        club = await self._clubs.get(club_id)
        if club is None:
            raise NotFoundError("Club no encontrado")
        return club

    async def update(
        self,
        user: User,
        club_id: str,
        values: dict[str, Any],
        *,
        imagen: UploadFile | None = None,
        banner: UploadFile | None = None,
    ) -> Document:
        club = await self.get(club_id)
        if club.get("uid_usersWeb") != user.auth_subject and not has_any_role(user, (Role.admin,)):
            raise ForbiddenError("No puedes editar este club")

        form = validate_form(ClubEditForm, values)
        fields = club_edit_fields(form)
        # Images are only replaced when a new file comes with the edit.
        owner = str(club.get("uid_usersWeb") or user.auth_subject)
        fields["imagen"] = await upload_optional(
            self._media, imagen, club_key(owner, "imagen", imagen.filename if imagen else None)
        ) or club.get("imagen")
        fields["banner"] = await upload_optional(
            self._media, banner, club_key(owner, "banner", banner.filename if banner else None)
        ) or club.get("banner")

        await self._clubs.update(club_id, fields)
        log.info("club_updated", uid=user.auth_subject, club_id=club_id)
        return {**club, **fields}

    async def list_all(self) -> list[Document]:
        return await self._clubs.list_all()
