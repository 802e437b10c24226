from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest

from goup.auth.guards import EVENT_ROLES, home_for, has_any_role
from goup.db.models import Role


def _user(role: Role, role_extra: Role | None = None) -> SimpleNamespace:
    return SimpleNamespace(role=role, role_extra=role_extra)


def test_has_any_role_checks_both_roles() -> None:
    assert has_any_role(_user(Role.user, Role.productor), EVENT_ROLES)
    assert has_any_role(_user(Role.club_owner), [Role.club_owner])
    assert not has_any_role(_user(Role.user), EVENT_ROLES)
    assert not has_any_role(None, EVENT_ROLES)


def test_home_for_each_role() -> None:
    assert home_for(_user(Role.admin)) == "/admin"
    assert home_for(_user(Role.club_owner)) == "/dashboard/mi-club"
    assert home_for(_user(Role.productor)) == "/dashboard/productora"
    assert home_for(_user(Role.user)) == "/solicitud-rol"
    assert home_for(None) == "/login"


@pytest.mark.asyncio
async def test_missing_or_bad_token_is_rejected(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/me")
    assert r.status_code == 401
    assert r.json()["detail"]["redirect"] == "/login"

    r = await client.get("/v1/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_first_sign_in_creates_a_plain_user(client: httpx.AsyncClient, auth_headers) -> None:
    headers = auth_headers("newbie", name="Nuevo Usuario")
    r = await client.get("/v1/me", headers=headers)
    assert r.status_code == 200
    me = r.json()
    assert me["rol"] == "user"
    assert me["rol_extra"] is None
    assert me["nombre"] == "Nuevo Usuario"
    assert me["can_create_event"] is False

    r = await client.get("/v1/me/home", headers=headers)
    assert r.json() == {"redirect": "/solicitud-rol", "needs_onboarding": True}

    # Plain users are kept out of every guarded area.
    for path in ("/v1/clubs/mine", "/v1/producers/mine", "/v1/events/mine", "/v1/admin/users"):
        r = await client.get(path, headers=headers)
        assert r.status_code == 403, path
        assert r.json()["detail"] == {"message": "No autorizado", "redirect": "/unauthorized"}


@pytest.mark.asyncio
async def test_secondary_role_opens_its_area(client: httpx.AsyncClient, auth_headers, seed_user) -> None:
    await seed_user("dual", role=Role.user, role_extra=Role.club_owner)
    r = await client.get("/v1/clubs/mine", headers=auth_headers("dual"))
    assert r.status_code == 200
    assert r.json() == {"has_club": False, "club_id": None}


@pytest.mark.asyncio
async def test_disabled_user_is_rejected(client: httpx.AsyncClient, auth_headers, seed_user) -> None:
    await seed_user("banned", role=Role.productor, is_active=False)
    r = await client.get("/v1/producers/mine", headers=auth_headers("banned"))
    assert r.status_code == 403
    assert r.json()["detail"]["message"] == "Tu cuenta está deshabilitada"
