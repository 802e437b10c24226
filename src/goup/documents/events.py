from __future__ import annotations

from goup.documents.store import Document, DocumentStore

EVENT_COLLECTION = "Eventos"


def owner_ref(uid: str) -> str:
    # Events reference their owner by user document path.
    return f"/usersWeb/{uid}"


class EventRepo:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def create(self, doc: Document) -> str:
        return await self._store.insert(EVENT_COLLECTION, doc)

    async def get(self, event_id: str) -> Document | None:
        return await self._store.get(EVENT_COLLECTION, event_id)

    async def list_for_owner(self, uid: str) -> list[Document]:
        return await self._store.find(
            EVENT_COLLECTION, {"uid_usersWeb": owner_ref(uid)}, sort="fecha", descending=True
        )

    async def list_all(self) -> list[Document]:
        return await self._store.find(EVENT_COLLECTION, sort="fecha", descending=True)

    async def update(self, event_id: str, fields: Document) -> bool:
        return await self._store.update(EVENT_COLLECTION, event_id, fields)
