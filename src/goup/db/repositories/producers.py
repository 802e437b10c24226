from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from goup.db.models import Producer, utcnow


class ProducerRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_user(self, user_id: uuid.UUID) -> Producer | None:
        stmt = select(Producer).where(Producer.user_id == user_id).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(
        self,
        *,
        user_id: uuid.UUID,
        name: str,
        email: str,
        phone: str | None = None,
        image: str | None = None,
        rut: str | None = None,
        business_name: str | None = None,
    ) -> Producer:
        producer = Producer(
            user_id=user_id,
            name=name,
            email=email,
            phone=phone,
            image=image,
            rut=rut,
            business_name=business_name,
        )
        self._session.add(producer)
        await self._session.flush()
        return producer

    async def update(self, producer_id: uuid.UUID, **fields: Any) -> Producer | None:
        producer = await self._session.get(Producer, producer_id, with_for_update=True)
        if producer is None:
            return None
        for key, value in fields.items():
            setattr(producer, key, value)
        producer.updated_at = utcnow()
        await self._session.flush()
        return producer
