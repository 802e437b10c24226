"""
tests.test_admin

Role pair helpers, row actions and the admin panel endpoints.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import httpx
import pytest

from goup.db.models import RequestStatus, RequestType, Role
from goup.services.admin import (
    AdminRow,
    RowChange,
    apply_approval_roles,
    confirm,
    disable,
    enable,
    ensure_role_pair_for,
    filter_rows,
    finalize,
    is_approved_row,
    is_pending_row,
    pending_count,
    sanitize_pair,
    sort_rows,
)


def _row(uid: str = "u1", **overrides) -> AdminRow:
    base = AdminRow(
        uid=uid,
        name=uid.title(),
        email=f"{uid}@goupevents.cl",
        role=Role.user,
        role_extra=None,
        can_create_event=False,
        request_type=None,
        request_status=None,
        request_sent_at=None,
        is_active=True,
    )
    return replace(base, **overrides)


def test_sanitize_pair_drops_duplicate_secondary() -> None:
    assert sanitize_pair(Role.productor, Role.productor) == (Role.productor, None)
    assert sanitize_pair(Role.productor, Role.club_owner) == (Role.productor, Role.club_owner)
    assert sanitize_pair(Role.user, None) == (Role.user, None)


def test_ensure_role_pair_keeps_admin_and_pairs_with_user() -> None:
    assert ensure_role_pair_for(Role.user, None, [Role.productor]) == (Role.productor, Role.user)
    assert ensure_role_pair_for(Role.admin, None, [Role.club_owner]) == (Role.admin, Role.club_owner)
    assert ensure_role_pair_for(Role.user, Role.admin, [Role.productor, Role.club_owner]) == (
        Role.admin,
        Role.productor,
    )
    assert ensure_role_pair_for(Role.club_owner, None, [Role.productor]) == (
        Role.productor,
        Role.club_owner,
    )
    assert ensure_role_pair_for(Role.user, None, []) == (Role.user, None)


def test_apply_approval_roles_per_request_type() -> None:
    assert apply_approval_roles(_row()) == (Role.user, None)
    assert apply_approval_roles(_row(request_type=RequestType.club_owner)) == (
        Role.club_owner,
        Role.user,
    )
    assert apply_approval_roles(_row(request_type=RequestType.ambos)) == (
        Role.productor,
        Role.club_owner,
    )


def test_confirm_disable_enable() -> None:
    sent = datetime(2025, 1, 1, 12, 0)
    row = _row(request_type=RequestType.productor, request_status=RequestStatus.pendiente, request_sent_at=sent)

    confirmed = confirm(row)
    assert (confirmed.role, confirmed.role_extra) == (Role.productor, Role.user)
    assert confirmed.can_create_event is True
    assert confirmed.request_status == RequestStatus.aprobada

    disabled = disable(confirmed)
    assert disabled.is_active is False
    assert disabled.can_create_event is False
    assert disabled.request_status == RequestStatus.rechazada

    # Status survives re-enabling only when a request was sent.
    assert enable(disabled).request_status == RequestStatus.rechazada
    assert enable(_row(is_active=False, request_status=RequestStatus.rechazada)).request_status is None


def test_finalize_rules() -> None:
    assert finalize(_row(is_active=False, can_create_event=True)).request_status == RequestStatus.rechazada
    assert finalize(_row(is_active=False, can_create_event=True)).can_create_event is False
    assert finalize(_row(role=Role.club_owner)).request_status == RequestStatus.aprobada
    assert finalize(_row(request_status=RequestStatus.pendiente)).request_status == RequestStatus.pendiente


def test_pending_and_approved_rows_sorting() -> None:
    old = _row("zoe", request_sent_at=datetime(2025, 1, 1), request_status=RequestStatus.pendiente)
    new = _row("yan", request_sent_at=datetime(2025, 2, 1), request_status=RequestStatus.pendiente)
    approved = _row("ana", role=Role.productor)
    rejected = _row("bob", request_sent_at=datetime(2025, 3, 1), request_status=RequestStatus.rechazada)
    off = _row("carl", is_active=False)
    rows = [off, approved, old, rejected, new]

    assert is_pending_row(new) and not is_pending_row(rejected) and not is_pending_row(approved)
    assert is_approved_row(approved)
    assert pending_count(rows) == 2

    assert [r.uid for r in sort_rows(rows)] == ["ana", "bob", "carl", "yan", "zoe"]
    assert [r.uid for r in sort_rows(rows, "pending-first")][:2] == ["yan", "zoe"]
    assert sort_rows(rows, "approved-first")[0].uid == "ana"

    assert [r.uid for r in filter_rows(rows, "disabled")] == ["carl"]
    assert len(filter_rows(rows, "active")) == 4
    assert len(filter_rows(rows, "all")) == 5



def test_row_change_only_touches_edited_cells() -> None:
    row = _row(
        role=Role.productor,
        role_extra=Role.user,
        can_create_event=True,
        request_status=RequestStatus.aprobada,
    )

    assert RowChange(uid="u1").apply(row) == row
    assert RowChange(uid="u1", is_active=False).apply(row) == replace(row, is_active=False)
    assert RowChange(uid="u1", clear_role_extra=True).apply(row).role_extra is None
    moved = RowChange(uid="u1", role=Role.user).apply(row)
    assert (moved.role, moved.role_extra, moved.can_create_event) == (Role.user, None, True)


@pytest.mark.asyncio
async def test_admin_panel_requires_admin(client: httpx.AsyncClient, auth_headers, seed_user) -> None:
    await seed_user("owner", role=Role.club_owner)
    r = await client.get("/v1/admin/users", headers=auth_headers("owner"))
    assert r.status_code == 403
    assert r.json()["detail"]["redirect"] == "/unauthorized"


@pytest.mark.asyncio
async def test_admin_reviews_a_role_request(client: httpx.AsyncClient, auth_headers, seed_user) -> None:
    await seed_user("boss", role=Role.admin)
    await seed_user(
        "maria",
        request_type=RequestType.productor,
        request_status=RequestStatus.pendiente,
        request_sent_at=datetime(2025, 5, 1, 10, 0),
    )
    admin = auth_headers("boss")

    r = await client.get("/v1/admin/users", params={"sort": "pending-first"}, headers=admin)
    assert r.status_code == 200
    body = r.json()
    assert body["pending"] == 1
    assert body["rows"][0]["uid"] == "maria"

    r = await client.post("/v1/admin/users/maria/confirm", headers=admin)
    assert r.status_code == 200
    row = r.json()
    assert (row["rol"], row["rol_extra"]) == ("productor", "user")
    assert row["solicitud_estado"] == "aprobada"
    assert row["can_create_event"] is True

    r = await client.post("/v1/admin/users/maria/disable", headers=admin)
    assert r.json()["is_active"] is False
    assert r.json()["solicitud_estado"] == "rechazada"

    r = await client.get("/v1/admin/users", params={"view": "disabled"}, headers=admin)
    assert [row["uid"] for row in r.json()["rows"]] == ["maria"]

    r = await client.patch(
        "/v1/admin/users",
        json={
            "changes": [
                {
                    "uid": "maria",
                    "rol": "club_owner",
                    "rol_extra": "club_owner",
                    "can_create_event": True,
                    "is_active": True,
                }
            ]
        },
        headers=admin,
    )
    assert r.status_code == 200
    saved = r.json()[0]
    assert saved["rol_extra"] is None
    assert saved["solicitud_estado"] == "aprobada"
    assert saved["can_create_event"] is True

    r = await client.post("/v1/admin/users/ghost/enable", headers=admin)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_partial_row_save_keeps_unedited_cells(client: httpx.AsyncClient, auth_headers, seed_user) -> None:
    await seed_user("boss", role=Role.admin)
    await seed_user(
        "maria",
        request_type=RequestType.productor,
        request_status=RequestStatus.pendiente,
        request_sent_at=datetime(2025, 5, 1, 10, 0),
    )

    r = await client.patch(
        "/v1/admin/users",
        json={"changes": [{"uid": "maria", "can_create_event": True}]},
        headers=auth_headers("boss"),
    )
    assert r.status_code == 200
    saved = r.json()[0]
    assert saved["can_create_event"] is True
    assert saved["solicitud_estado"] == "pendiente"
    assert (saved["rol"], saved["rol_extra"]) == ("user", None)
    assert saved["is_active"] is True

    r = await client.get("/v1/role-requests/me", headers=auth_headers("maria"))
    assert r.json()["estado"] == "pendiente"

    r = await client.patch(
        "/v1/admin/users",
        json={"changes": [{"uid": "maria", "rol": "user"}]},
        headers=auth_headers("boss"),
    )
    saved = r.json()[0]
    assert saved["can_create_event"] is True
    assert saved["solicitud_estado"] == "pendiente"
