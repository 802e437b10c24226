from __future__ import annotations

from goup.documents.store import Document, DocumentStore

CLUB_COLLECTION = "club"


class ClubRepo:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def create(self, doc: Document) -> str:
        return await self._store.insert(CLUB_COLLECTION, doc)

    async def get(self, club_id: str) -> Document | None:
        return await self._store.get(CLUB_COLLECTION, club_id)

    async def first_for_owner(self, owner_uid: str) -> Document | None:
        found = await self._store.find(CLUB_COLLECTION, {"uid_usersWeb": owner_uid}, limit=1)
        return found[0] if found else None

    async def list_all(self) -> list[Document]:
        return await self._store.find(CLUB_COLLECTION, sort="nombre")

    async def update(self, club_id: str, fields: Document) -> bool:
        return await self._store.update(CLUB_COLLECTION, club_id, fields)
