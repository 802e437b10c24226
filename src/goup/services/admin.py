"""
goup.services.admin

User administration: role assignment and role request review.

Responsibilities:
- Pure helpers over admin table rows (role pairs, approval, pending/approved checks).
- Row actions (confirm / disable / enable) and the rules applied on save.
- Listing with view filter, sort mode and pending count.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Literal

from sqlalchemy.ext.asyncio import AsyncSession

from goup.db.models import RequestStatus, RequestType, Role, User
from goup.db.repositories.users import UserRepo
from goup.errors import NotFoundError
from goup.observability.logging import get_logger

log = get_logger(__name__)

ViewMode = Literal["all", "active", "disabled"]
SortMode = Literal["none", "pending-first", "approved-first"]

ELEVATED_ROLES = frozenset({Role.admin, Role.productor, Role.club_owner})


@dataclass(frozen=True, slots=True)
class AdminRow:
    uid: str
    name: str | None
    email: str | None
    role: Role
    role_extra: Role | None
    can_create_event: bool
    request_type: RequestType | None
    request_status: RequestStatus | None
    request_sent_at: datetime | None
    is_active: bool

    @classmethod
    def from_user(cls, user: User) -> AdminRow:
        return cls(
            uid=user.auth_subject,
            name=user.name,
            email=user.email,
            role=user.role,
            role_extra=user.role_extra,
            can_create_event=user.can_create_event,
            request_type=user.request_type,
            request_status=user.request_status,
            request_sent_at=user.request_sent_at,
            is_active=user.is_active,
        )


# ---------- role pairs ------------------------------------------------------


def sanitize_pair(primary: Role, secondary: Role | None) -> tuple[Role, Role | None]:
    """A secondary role equal to the primary is dropped."""

    if secondary is not None and primary == secondary:
        return primary, None
    return primary, secondary


def ensure_role_pair_for(
    role: Role, role_extra: Role | None, wanted: Sequence[Role]
) -> tuple[Role, Role | None]:
    """
    Role pair granting `wanted` while keeping admin and, space permitting, the
    roles the user already has. At most two distinct roles; a lone elevated role
    is paired with `user`.
    """

    out: list[Role] = []
    if Role.admin in (role, role_extra):
        out.append(Role.admin)
    for w in wanted:
        if len(out) >= 2:
            break
        if w not in out:
            out.append(w)
    for existing in (role, role_extra):
        if len(out) >= 2:
            break
        if existing is not None and existing not in out:
            out.append(existing)
    if not out:
        out.append(Role.user)
    if len(out) == 1 and Role.user not in out:
        out.append(Role.user)
    return out[0], (out[1] if len(out) > 1 else None)


_APPROVAL_ROLES: dict[RequestType, tuple[Role, ...]] = {
    RequestType.productor: (Role.productor,),
    RequestType.club_owner: (Role.club_owner,),
    RequestType.ambos: (Role.productor, Role.club_owner),
}


def apply_approval_roles(row: AdminRow) -> tuple[Role, Role | None]:
    if row.request_type is None:
        return row.role, row.role_extra
    return ensure_role_pair_for(row.role, row.role_extra, _APPROVAL_ROLES[row.request_type])


def has_elevated_role(row: AdminRow) -> bool:
    return row.role in ELEVATED_ROLES or (
        row.role_extra is not None and row.role_extra in ELEVATED_ROLES
    )


def is_approved_row(row: AdminRow) -> bool:
    return has_elevated_role(row) or row.request_status == RequestStatus.aprobada


def is_pending_row(row: AdminRow) -> bool:
    return (
        row.is_active
        and row.request_sent_at is not None
        and not is_approved_row(row)
        and row.request_status != RequestStatus.rechazada
    )


# ---------- row actions -----------------------------------------------------


def change_primary_role(row: AdminRow, role: Role) -> AdminRow:
    primary, secondary = sanitize_pair(role, row.role_extra)
    return replace(row, role=primary, role_extra=secondary)


def change_secondary_role(row: AdminRow, role: Role | None) -> AdminRow:
    if role is None:
        return replace(row, role_extra=None)
    primary, secondary = sanitize_pair(row.role, role)
    return replace(row, role=primary, role_extra=secondary)


def confirm(row: AdminRow) -> AdminRow:
    role, role_extra = apply_approval_roles(row)
    return replace(
        row,
        role=role,
        role_extra=role_extra,
        is_active=True,
        can_create_event=True,
        request_status=RequestStatus.aprobada,
    )


def disable(row: AdminRow) -> AdminRow:
    return replace(
        row, is_active=False, can_create_event=False, request_status=RequestStatus.rechazada
    )


def enable(row: AdminRow) -> AdminRow:
    return replace(
        row,
        is_active=True,
        request_status=row.request_status if row.request_sent_at is not None else None,
    )


ACTIONS = {"confirm": confirm, "disable": disable, "enable": enable}


def finalize(row: AdminRow) -> AdminRow:
    """Rules applied to every row when it is saved."""

    if not row.is_active:
        status = RequestStatus.rechazada
    elif has_elevated_role(row):
        status = RequestStatus.aprobada
    else:
        status = row.request_status
    return replace(
        row,
        request_status=status,
        can_create_event=row.can_create_event if row.is_active else False,
    )


# ---------- listing ---------------------------------------------------------


def _name_key(row: AdminRow) -> str:
    return (row.name or "").lower()


def _sent_ts(row: AdminRow) -> float:
    return row.request_sent_at.timestamp() if row.request_sent_at is not None else 0.0


def sort_rows(rows: Iterable[AdminRow], mode: SortMode = "none") -> list[AdminRow]:
    if mode == "pending-first":
        # Pending rows first, newest request first among them.
        def key(r: AdminRow) -> tuple:
            pending = is_pending_row(r)
            return (not pending, -_sent_ts(r) if pending else 0.0, _name_key(r))

        return sorted(rows, key=key)
    if mode == "approved-first":
        return sorted(rows, key=lambda r: (not is_approved_row(r), _name_key(r)))
    return sorted(rows, key=_name_key)


def filter_rows(rows: Iterable[AdminRow], view: ViewMode = "active") -> list[AdminRow]:
    if view == "all":
        return list(rows)
    if view == "active":
        return [r for r in rows if r.is_active]
    return [r for r in rows if not r.is_active]


def pending_count(rows: Iterable[AdminRow]) -> int:
    return sum(1 for r in rows if is_pending_row(r))


@dataclass(frozen=True, slots=True)
class RowChange:
    """Edited cells of one admin row; `None` leaves the stored value in place."""

    uid: str
    role: Role | None = None
    role_extra: Role | None = None
    # An explicit empty secondary role, as opposed to the cell not being edited.
    clear_role_extra: bool = False
    can_create_event: bool | None = None
    is_active: bool | None = None
    request_status: RequestStatus | None = None

    def apply(self, row: AdminRow) -> AdminRow:
        role_extra = None if self.clear_role_extra else (self.role_extra or row.role_extra)
        role, role_extra = sanitize_pair(self.role or row.role, role_extra)
        return replace(
            row,
            role=role,
            role_extra=role_extra,
            can_create_event=_or(self.can_create_event, row.can_create_event),
            is_active=_or(self.is_active, row.is_active),
            request_status=self.request_status or row.request_status,
        )


def _or(value: bool | None, current: bool) -> bool:
    return current if value is None else value


class AdminService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._users = UserRepo(session)

    async def list_rows(
        self, *, view: ViewMode = "active", sort: SortMode = "none"
    ) -> tuple[list[AdminRow], int]:
        rows = [AdminRow.from_user(u) for u in await self._users.list_all()]
        return filter_rows(sort_rows(rows, sort), view), pending_count(rows)

    async def _persist(self, user: User, row: AdminRow) -> AdminRow:
        final = finalize(row)
        await self._users.update(
            user.id,
            role=final.role,
            role_extra=final.role_extra,
            can_create_event=final.can_create_event,
            is_active=final.is_active,
            request_status=final.request_status,
        )
        return final

    async def save(self, changes: Sequence[RowChange], *, actor: str) -> list[AdminRow]:
        users = {u.auth_subject: u for u in await self._users.list_by_subjects([c.uid for c in changes])}
        missing = [c.uid for c in changes if c.uid not in users]
        if missing:
            raise NotFoundError(f"Usuario no encontrado: {missing[0]}")

        saved: list[AdminRow] = []
        for change in changes:
            user = users[change.uid]
            saved.append(await self._persist(user, change.apply(AdminRow.from_user(user))))
        await self._session.commit()
        log.info("admin_users_saved", actor=actor, count=len(saved))
        return saved

    async def apply_action(self, uid: str, action: str, *, actor: str) -> AdminRow:
        user = await self._users.get_by_subject(uid)
        if user is None:
            raise NotFoundError("Usuario no encontrado")
        row = await self._persist(user, ACTIONS[action](AdminRow.from_user(user)))
        await self._session.commit()
        log.info("admin_user_action", actor=actor, uid=uid, action=action)
        return row


# --- Module Notes -----------------------------------------------------------
# Actions are saved immediately through the same `finalize` rules as a batch save.
