"""
goup.services.role_requests

Role requests (a user asking to become producer and/or club owner).

Responsibilities:
- Store the request on the user record and stamp it as pending.
- Notify the team by email; a failed email leaves the request in place.
- Allow resending after a rejection.
"""

from __future__ import annotations

from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from goup.db.models import RequestStatus, RequestType, User, utcnow
from goup.db.repositories.users import UserRepo
from goup.errors import NotFoundError, UpstreamError
from goup.forms.coerce import blank_to_none
from goup.forms.schemas import RoleRequestForm
from goup.notifications.email import RoleRequestEmail, SendGridMailer
from goup.observability.logging import get_logger

log = get_logger(__name__)


def request_view(user: User) -> dict[str, Any]:
    return {
        "tipo": user.request_type,
        "estado": user.request_status,
        "enviada_at": user.request_sent_at.isoformat() if user.request_sent_at else None,
    }


class RoleRequestService:
    def __init__(self, *, session: AsyncSession, mailer: SendGridMailer) -> None:
        self._session = session
        self._users = UserRepo(session)
        self._mailer = mailer

    async def submit(self, user: User, form: RoleRequestForm) -> tuple[User, bool]:
        """Returns the updated user and whether the notification email went out."""

        updated = await self._users.update(
            user.id,
            name=form.nombre,
            birth_date=blank_to_none(form.fecha_nacimiento),
            street=blank_to_none(form.calle),
            city=blank_to_none(form.ciudad),
            commune=blank_to_none(form.comuna),
            country=blank_to_none(form.pais),
            request_type=RequestType(form.solicitud_tipo),
            request_status=RequestStatus.pendiente,
            request_sent_at=utcnow(),
        )
        await self._session.commit()
        log.info("role_request_sent", uid=user.auth_subject, tipo=form.solicitud_tipo)

        try:
            await self._mailer.send_role_request(
                RoleRequestEmail(
                    email=user.email,
                    nombre=form.nombre,
                    fecha_nacimiento=form.fecha_nacimiento,
                    calle=form.calle,
                    ciudad=form.ciudad,
                    comuna=form.comuna,
                    pais=form.pais,
                    tipo_solicitud=form.solicitud_tipo,
                )
            )
        except (UpstreamError, httpx.HTTPError) as e:
            log.warning("role_request_email_failed", uid=user.auth_subject, error=str(e))
            return updated or user, False
        return updated or user, True

    async def resend(self, user: User) -> User:
        if user.request_type is None:
            raise NotFoundError("No tienes una solicitud para reenviar")
        updated = await self._users.update(
            user.id, request_status=RequestStatus.pendiente, request_sent_at=utcnow()
        )
        await self._session.commit()
        log.info("role_request_resent", uid=user.auth_subject)
        return updated or user
