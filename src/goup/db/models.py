"""
goup.db.models

Relational schema.

Responsibilities:
- Define ORM models for the relational store:
  - User: identity + profile, roles, event-creation permission and the embedded
    role request (type, status, sent-at) together with the address given on it
  - Producer: promoter profile owned by one user
"""

from __future__ import annotations

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Enum, ForeignKey, String, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from goup.db.base import Base


def utcnow() -> datetime:
    # Naive UTC timestamps; SQLite drops tzinfo anyway.
    return datetime.now(UTC).replace(tzinfo=None)


class Role(enum.StrEnum):
    # Member names equal values: SQLAlchemy persists enum names.
    admin = "admin"
    club_owner = "club_owner"
    productor = "productor"
    user = "user"


class RequestType(enum.StrEnum):
    productor = "productor"
    club_owner = "club_owner"
    ambos = "ambos"


class RequestStatus(enum.StrEnum):
    pendiente = "pendiente"
    aprobada = "aprobada"
    rechazada = "rechazada"


class User(Base):
    __tablename__ = "usuario"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    # Subject claim of the identity provider token.
    auth_subject: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)

    email: Mapped[str | None] = mapped_column(String(256), nullable=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    rut: Mapped[str | None] = mapped_column(String(32), nullable=True)
    address: Mapped[str | None] = mapped_column(String(512), nullable=True)
    photo: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    sex: Mapped[str | None] = mapped_column(String(16), nullable=True)
    birth_date: Mapped[str | None] = mapped_column(String(32), nullable=True)

    role: Mapped[Role] = mapped_column(Enum(Role), nullable=False, default=Role.user, index=True)
    role_extra: Mapped[Role | None] = mapped_column(Enum(Role), nullable=True)
    can_create_event: Mapped[bool] = mapped_column(nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)

    request_type: Mapped[RequestType | None] = mapped_column(Enum(RequestType), nullable=True)
    request_status: Mapped[RequestStatus | None] = mapped_column(
        Enum(RequestStatus), nullable=True, index=True
    )
    request_sent_at: Mapped[datetime | None] = mapped_column(nullable=True)

    street: Mapped[str | None] = mapped_column(String(256), nullable=True)
    city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    commune: Mapped[str | None] = mapped_column(String(128), nullable=True)
    country: Mapped[str | None] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def roles(self) -> frozenset[Role]:
        return frozenset(r for r in (self.role, self.role_extra) if r is not None)


class Producer(Base):
    __tablename__ = "productor"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    # One producer per user is checked by the service before insert, not by a constraint.
    user_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("usuario.id"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    email: Mapped[str] = mapped_column(String(256), nullable=False)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    rut: Mapped[str | None] = mapped_column(String(32), nullable=True)
    business_name: Mapped[str | None] = mapped_column(String(256), nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)


# --- Module Notes -----------------------------------------------------------
# Role request fields are embedded on `usuario` rather than a separate table: a user
# has at most one open request and the admin panel edits both in the same row.
