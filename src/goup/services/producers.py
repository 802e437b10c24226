"""
goup.services.producers

Producer (promoter) profile, one per user, in the relational store.
"""

from __future__ import annotations

from typing import Any

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from goup.db.models import Producer, User
from goup.db.repositories.producers import ProducerRepo
from goup.errors import ConflictError, NotFoundError
from goup.forms.coerce import blank_to_none
from goup.forms.schemas import ProducerForm
from goup.media.storage import MediaStorage, producer_key, upload_optional
from goup.observability.logging import get_logger

log = get_logger(__name__)

PRODUCER_EXISTS = "Ya tienes una productora creada"


def producer_view(producer: Producer) -> dict[str, Any]:
    return {
        "id": str(producer.id),
        "nombre": producer.name,
        "telefono": producer.phone,
        "correo": producer.email,
        "imagen": producer.image,
        "rut": producer.rut,
        "rs": producer.business_name,
        "created_at": producer.created_at.isoformat(),
    }


class ProducerService:
    def __init__(self, *, session: AsyncSession, media: MediaStorage) -> None:
        self._session = session
        self._producers = ProducerRepo(session)
        self._media = media

    async def create(
        self, user: User, form: ProducerForm, *, imagen: UploadFile | None = None
    ) -> Producer:
        if await self._producers.get_for_user(user.id) is not None:
            raise ConflictError(PRODUCER_EXISTS)

        image_url = await upload_optional(
            self._media, imagen, producer_key(imagen.filename if imagen else None)
        )
        producer = await self._producers.create(
            user_id=user.id,
            name=form.nombre,
            email=form.correo,
            phone=blank_to_none(form.telefono),
            image=image_url,
            rut=blank_to_none(form.rut),
            business_name=blank_to_none(form.rs),
        )
        await self._session.commit()
        log.info("producer_created", uid=user.auth_subject, producer_id=str(producer.id))
        return producer

    async def mine(self, user: User) -> Producer:
        producer = await self._producers.get_for_user(user.id)
        if producer is None:
            raise NotFoundError("No tienes una productora")
        return producer

    async def update(
        self, user: User, form: ProducerForm, *, imagen: UploadFile | None = None
    ) -> Producer:
        producer = await self.mine(user)
        fields: dict[str, Any] = {
            "name": form.nombre,
            "email": form.correo,
            "phone": blank_to_none(form.telefono),
            "rut": blank_to_none(form.rut),
            "business_name": blank_to_none(form.rs),
        }
        image_url = await upload_optional(
            self._media, imagen, producer_key(imagen.filename if imagen else None)
        )
        if image_url is not None:
            fields["image"] = image_url

        updated = await self._producers.update(producer.id, **fields)
        await self._session.commit()
        log.info("producer_updated", uid=user.auth_subject, producer_id=str(producer.id))
        return updated or producer
