"""
goup.db.repositories.users

Repository for `User` entities.

Responsibilities:
- Fetch-or-create the user record for an authenticated identity.
- Patch profile, role request and admin-managed fields.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from goup.db.models import Role, User, utcnow

# Columns a caller is allowed to patch through `update`.
_PATCHABLE = frozenset(
    {
        "email",
        "name",
        "phone",
        "rut",
        "address",
        "photo",
        "sex",
        "birth_date",
        "role",
        "role_extra",
        "can_create_event",
        "is_active",
        "request_type",
        "request_status",
        "request_sent_at",
        "street",
        "city",
        "commune",
        "country",
    }
)


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_subject(self, auth_subject: str) -> User | None:
        stmt = select(User).where(User.auth_subject == auth_subject)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_or_create(
        self,
        *,
        auth_subject: str,
        email: str | None,
        name: str | None,
    ) -> tuple[User, bool]:
        existing = await self.get_by_subject(auth_subject)
        if existing is not None:
            return existing, False

        user = User(
            auth_subject=auth_subject,
            email=email,
            name=name or "",
            role=Role.user,
            role_extra=None,
            can_create_event=False,
            is_active=True,
        )
        self._session.add(user)
        await self._session.flush()
        return user, True

    async def update(self, user_id: uuid.UUID, **fields: Any) -> User | None:
        unknown = set(fields) - _PATCHABLE
        if unknown:
            raise ValueError(f"unknown user fields: {sorted(unknown)}")

        user = await self._session.get(User, user_id, with_for_update=True)
        if user is None:
            return None
        for key, value in fields.items():
            setattr(user, key, value)
        user.updated_at = utcnow()
        await self._session.flush()
        return user

    async def list_all(self) -> list[User]:
        stmt = select(User).order_by(User.created_at)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_by_subjects(self, subjects: list[str]) -> list[User]:
        if not subjects:
            return []
        stmt = select(User).where(User.auth_subject.in_(subjects))
        return list((await self._session.execute(stmt)).scalars().all())


# --- Module Notes -----------------------------------------------------------
# The admin panel addresses users by `auth_subject` (the "uid" shown in the table).
