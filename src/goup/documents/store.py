"""
goup.documents.store

Document store boundary (clubs and events).

Responsibilities:
- Define the small document API the repositories use.
- Provide a MongoDB implementation (pymongo async client).
- Provide an in-process implementation for dev/test (`memory://`).
"""

from __future__ import annotations

import copy
import uuid
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient

from goup.settings import Settings

Document = dict[str, Any]


class DocumentStore(ABC):
    """
    Collections hold plain dict documents keyed by a string `id`.
    Filters are equality matches on top-level fields.
    """

    @abstractmethod
    async def insert(self, collection: str, doc: Document) -> str: ...

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Document | None: ...

    @abstractmethod
    async def find(
        self,
        collection: str,
        filter: Document | None = None,
        *,
        sort: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]: ...

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: Document) -> bool: ...

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool: ...

    @abstractmethod
    async def ping(self) -> None: ...

    async def close(self) -> None:
        return None


def new_document_id() -> str:
    return uuid.uuid4().hex


def iso_now() -> str:
    # Same shape as JavaScript `toISOString()`, which the clients already parse.
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class MemoryDocumentStore(DocumentStore):
    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = {}

    def _coll(self, name: str) -> dict[str, Document]:
        return self._collections.setdefault(name, {})

    async def insert(self, collection: str, doc: Document) -> str:
        doc_id = str(doc.get("id") or new_document_id())
        self._coll(collection)[doc_id] = {**copy.deepcopy(doc), "id": doc_id}
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Document | None:
        doc = self._coll(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def find(
        self,
        collection: str,
        filter: Document | None = None,
        *,
        sort: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        criteria = filter or {}
        docs = [
            copy.deepcopy(d)
            for d in self._coll(collection).values()
            if all(d.get(k) == v for k, v in criteria.items())
        ]
        if sort is not None:
            # Missing/None keys sort first (ascending), like MongoDB.
            docs.sort(
                key=lambda d: (d.get(sort) is not None, d.get(sort) or ""),
                reverse=descending,
            )
        if limit is not None:
            docs = docs[:limit]
        return docs

    async def update(self, collection: str, doc_id: str, fields: Document) -> bool:
        doc = self._coll(collection).get(doc_id)
        if doc is None:
            return False
        doc.update(copy.deepcopy(fields))
        doc["id"] = doc_id
        return True

    async def delete(self, collection: str, doc_id: str) -> bool:
        return self._coll(collection).pop(doc_id, None) is not None

    async def ping(self) -> None:
        return None


class MongoDocumentStore(DocumentStore):
    def __init__(self, *, url: str, database: str) -> None:
        self._client: AsyncMongoClient = AsyncMongoClient(url, tz_aware=False)
        self._db = self._client[database]

    @staticmethod
    def _out(raw: Document | None) -> Document | None:
        if raw is None:
            return None
        doc = dict(raw)
        doc["id"] = str(doc.pop("_id"))
        return doc

    async def insert(self, collection: str, doc: Document) -> str:
        body = dict(doc)
        doc_id = str(body.pop("id", None) or new_document_id())
        await self._db[collection].insert_one({"_id": doc_id, **body})
        return doc_id

    async def get(self, collection: str, doc_id: str) -> Document | None:
        return self._out(await self._db[collection].find_one({"_id": doc_id}))

    async def find(
        self,
        collection: str,
        filter: Document | None = None,
        *,
        sort: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        cursor = self._db[collection].find(filter or {})
        if sort is not None:
            cursor = cursor.sort(sort, DESCENDING if descending else ASCENDING)
        if limit is not None:
            cursor = cursor.limit(limit)
        return [self._out(raw) async for raw in cursor]  # type: ignore[misc]

    async def update(self, collection: str, doc_id: str, fields: Document) -> bool:
        body = {k: v for k, v in fields.items() if k != "id"}
        result = await self._db[collection].update_one({"_id": doc_id}, {"$set": body})
        return result.matched_count > 0

    async def delete(self, collection: str, doc_id: str) -> bool:
        result = await self._db[collection].delete_one({"_id": doc_id})
        return result.deleted_count > 0

    async def ping(self) -> None:
        await self._client.admin.command("ping")

    async def close(self) -> None:
        await self._client.close()


def create_document_store(settings: Settings) -> DocumentStore:
    if settings.document_store_url.startswith("memory://"):
        return MemoryDocumentStore()
    return MongoDocumentStore(
        url=settings.document_store_url, database=settings.document_store_db
    )


# --- Module Notes -----------------------------------------------------------
# The memory store is process-local: every app instance starts empty. Use it for
# dev/test only; prod points `GOUP_DOCUMENT_STORE_URL` at MongoDB.
