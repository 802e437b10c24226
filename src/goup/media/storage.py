"""
goup.media.storage

Public media bucket backed by the local filesystem.

Responsibilities:
- Save uploaded bytes under `media_root` and return the public URL.
- Build the object keys each upload flow uses.
- Validate avatar uploads (image content type, size limit).
"""

from __future__ import annotations

import time

import anyio
from fastapi import UploadFile

from goup.errors import GoUpError
from goup.settings import Settings

NOT_AN_IMAGE = "El archivo debe ser una imagen."
IMAGE_TOO_LARGE = "La imagen no puede superar los 3MB."


class InvalidUpload(GoUpError):
    pass


def now_ms() -> int:
    return int(time.time() * 1000)


def extension_of(filename: str | None, default: str = "jpg") -> str:
    name = filename or ""
    if "." not in name:
        return default
    return name.rsplit(".", 1)[-1].lower() or default


def club_key(uid: str, folder: str, filename: str | None) -> str:
    return f"club/{uid}/{folder}/{now_ms()}.{extension_of(filename)}"


def event_key(uid: str, folder: str, filename: str | None) -> str:
    return f"Eventos/{uid}/{folder}/{now_ms()}.{extension_of(filename)}"


def producer_key(filename: str | None) -> str:
    return f"productora/avatar/{now_ms()}_{filename or 'imagen'}"


def avatar_key(uid: str, filename: str | None) -> str:
    return f"avatars/{uid}/avatar.{extension_of(filename)}"


def check_avatar(content_type: str | None, size: int, *, max_bytes: int) -> None:
    if not (content_type or "").startswith("image/"):
        raise InvalidUpload(NOT_AN_IMAGE)
    if size > max_bytes:
        raise InvalidUpload(IMAGE_TOO_LARGE)


class MediaStorage:
    def __init__(self, *, root: str, base_url: str) -> None:
        self._root = anyio.Path(root)
        self._base_url = base_url.rstrip("/")

    def url_for(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    async def save(self, key: str, data: bytes) -> str:
        parts = key.split("/")
        if not key or key.startswith("/") or any(p in ("", ".", "..") for p in parts):
            raise InvalidUpload("Ruta de archivo inválida")

        target = self._root.joinpath(*parts)
        await target.parent.mkdir(parents=True, exist_ok=True)
        # Same key overwrites (avatars are upserted).
        await target.write_bytes(data)
        return self.url_for(key)

    async def save_upload(self, key: str, upload: UploadFile) -> str:
        return await self.save(key, await upload.read())


def create_media_storage(settings: Settings) -> MediaStorage:
    return MediaStorage(root=settings.media_root, base_url=settings.media_base_url)


async def upload_optional(
    media: MediaStorage, upload: UploadFile | None, key: str
) -> str | None:
    """Saves `upload` under `key`; a missing or empty file yields None."""

    if upload is None or not upload.filename:
        return None
    return await media.save_upload(key, upload)


# --- Module Notes -----------------------------------------------------------
# Uploads happen before the record write; a failed write leaves the file in place.
