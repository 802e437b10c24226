"""
tests.test_profile

Own profile edits and avatar uploads.
"""

from __future__ import annotations

import re
from pathlib import Path

import httpx
import pytest

from goup.media.storage import InvalidUpload, MediaStorage, avatar_key, check_avatar, extension_of


def test_upload_keys_and_avatar_checks() -> None:
    assert extension_of("foto.JPEG") == "jpeg"
    assert extension_of("sin-extension") == "jpg"
    assert extension_of(None) == "jpg"
    assert avatar_key("ana", "me.png") == "avatars/ana/avatar.png"

    check_avatar("image/png", 10, max_bytes=10)
    with pytest.raises(InvalidUpload, match="debe ser una imagen"):
        check_avatar("application/pdf", 10, max_bytes=10)
    with pytest.raises(InvalidUpload, match="3MB"):
        check_avatar("image/png", 11, max_bytes=10)


@pytest.mark.asyncio
async def test_media_keys_cannot_escape_the_root(tmp_path) -> None:
    media = MediaStorage(root=str(tmp_path), base_url="http://cdn/")
    assert await media.save("a/b.txt", b"x") == "http://cdn/a/b.txt"
    for key in ("../etc/passwd", "/abs", "a//b", ""):
        with pytest.raises(InvalidUpload):
            await media.save(key, b"x")


@pytest.mark.asyncio
async def test_update_profile_blanks_become_null(client: httpx.AsyncClient, auth_headers) -> None:
    headers = auth_headers("ana")
    r = await client.put(
        "/v1/me/profile",
        json={"nombre": "Ana Soto", "telefono": "+56912345678", "rut": "", "direccion": ""},
        headers=headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["nombre"] == "Ana Soto"
    assert body["telefono"] == "+56912345678"
    assert body["rut"] is None
    assert body["direccion"] is None

    r = await client.put("/v1/me/profile", json={"nombre": ""}, headers=headers)
    assert r.status_code == 422
    assert r.json()["detail"] == "El nombre es obligatorio"


@pytest.mark.asyncio
async def test_avatar_upload(client: httpx.AsyncClient, auth_headers, settings) -> None:
    headers = auth_headers("ana")
    r = await client.post(
        "/v1/me/avatar", headers=headers, files={"file": ("yo.PNG", b"png-bytes", "image/png")}
    )
    assert r.status_code == 200
    foto = r.json()["foto"]
    assert re.fullmatch(r"http://test/media/avatars/ana/avatar\.png\?v=\d+", foto)
    assert (Path(settings.media_root) / "avatars/ana/avatar.png").read_bytes() == b"png-bytes"

    r = await client.get("/v1/me", headers=headers)
    assert r.json()["foto"] == foto


@pytest.mark.asyncio
async def test_avatar_rejects_non_images_and_large_files(
    client: httpx.AsyncClient, auth_headers, settings
) -> None:
    headers = auth_headers("ana")
    r = await client.post(
        "/v1/me/avatar", headers=headers, files={"file": ("cv.pdf", b"%PDF", "application/pdf")}
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "El archivo debe ser una imagen."

    big = b"x" * (settings.avatar_max_bytes + 1)
    r = await client.post(
        "/v1/me/avatar", headers=headers, files={"file": ("big.jpg", big, "image/jpeg")}
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "La imagen no puede superar los 3MB."

    r = await client.get("/v1/me", headers=headers)
    assert r.json()["foto"] is None
