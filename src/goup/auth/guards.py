"""
goup.auth.guards

Pure role checks shared by dependencies and services.
"""

from __future__ import annotations

from collections.abc import Iterable

from goup.db.models import Role, User

UNAUTHORIZED_PATH = "/unauthorized"
LOGIN_PATH = "/login"
ONBOARDING_PATH = "/solicitud-rol"

ROLE_HOME: dict[Role, str] = {
    Role.admin: "/admin",
    Role.club_owner: "/dashboard/mi-club",
    Role.productor: "/dashboard/productora",
    Role.user: ONBOARDING_PATH,
}

# Role sets guarding each area.
CLUB_ROLES = (Role.admin, Role.club_owner)
PRODUCER_ROLES = (Role.admin, Role.productor)
EVENT_ROLES = (Role.admin, Role.club_owner, Role.productor)
ADMIN_ROLES = (Role.admin,)


def has_any_role(user: User | None, allowed: Iterable[Role | str]) -> bool:
    """True when the primary or the secondary role is allowed."""

    if user is None:
        return False
    allowed_set = {str(r) for r in allowed}
    return any(r is not None and str(r) in allowed_set for r in (user.role, user.role_extra))


def needs_onboarding(user: User | None) -> bool:
    return user is not None and user.role == Role.user


def home_for(user: User | None) -> str:
    if user is None:
        return LOGIN_PATH
    return ROLE_HOME.get(user.role, "/")
