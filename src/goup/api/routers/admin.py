"""
goup.api.routers.admin

Admin panel: user roles and role request review.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from goup.api.deps import db_session
from goup.auth.deps import require_roles
from goup.auth.guards import ADMIN_ROLES
from goup.db.models import RequestStatus, RequestType, Role, User
from goup.services.admin import AdminRow, AdminService, RowChange, SortMode, ViewMode

router = APIRouter(prefix="/v1/admin/users", tags=["admin"])


class AdminRowOut(BaseModel):
    uid: str
    nombre: str | None
    correo: str | None
    rol: Role
    rol_extra: Role | None
    can_create_event: bool
    solicitud_tipo: RequestType | None
    solicitud_estado: RequestStatus | None
    solicitud_enviada_at: datetime | None
    is_active: bool

    @classmethod
    def of(cls, row: AdminRow) -> AdminRowOut:
        return cls(
            uid=row.uid,
            nombre=row.name,
            correo=row.email,
            rol=row.role,
            rol_extra=row.role_extra,
            can_create_event=row.can_create_event,
            solicitud_tipo=row.request_type,
            solicitud_estado=row.request_status,
            solicitud_enviada_at=row.request_sent_at,
            is_active=row.is_active,
        )


class AdminListResponse(BaseModel):
    rows: list[AdminRowOut]
    pending: int


class RowChangeIn(BaseModel):
    uid: str = Field(min_length=1)
    # Omitted cells keep the stored value.
    rol: Role | None = None
    rol_extra: Role | None = None
    can_create_event: bool | None = None
    is_active: bool | None = None
    solicitud_estado: RequestStatus | None = None


class SaveRequest(BaseModel):
    changes: list[RowChangeIn] = Field(default_factory=list)


@router.get("", response_model=AdminListResponse)
async def list_users(
    view: ViewMode = "active",
    sort: SortMode = "none",
    _: User = Depends(require_roles(*ADMIN_ROLES)),
    session: AsyncSession = Depends(db_session),
) -> AdminListResponse:
    rows, pending = await AdminService(session=session).list_rows(view=view, sort=sort)
    return AdminListResponse(rows=[AdminRowOut.of(r) for r in rows], pending=pending)


@router.patch("", response_model=list[AdminRowOut])
async def save_users(
    body: SaveRequest,
    admin: User = Depends(require_roles(*ADMIN_ROLES)),
    session: AsyncSession = Depends(db_session),
) -> list[AdminRowOut]:
    if not body.changes:
        return []
    changes = [
        RowChange(
            uid=c.uid,
            role=c.rol,
            role_extra=c.rol_extra,
            clear_role_extra="rol_extra" in c.model_fields_set and c.rol_extra is None,
            can_create_event=c.can_create_event,
            is_active=c.is_active,
            request_status=c.solicitud_estado,
        )
        for c in body.changes
    ]
    saved = await AdminService(session=session).save(changes, actor=admin.auth_subject)
    return [AdminRowOut.of(r) for r in saved]


@router.post("/{uid}/{action}", response_model=AdminRowOut)
async def user_action(
    uid: str,
    action: Literal["confirm", "disable", "enable"],
    admin: User = Depends(require_roles(*ADMIN_ROLES)),
    session: AsyncSession = Depends(db_session),
) -> AdminRowOut:
    row = await AdminService(session=session).apply_action(uid, action, actor=admin.auth_subject)
    return AdminRowOut.of(row)
