from __future__ import annotations

import json
from typing import Any, List, Optional

from bson import ObjectId, json_util
from bson.json_util import RELAXED_JSON_OPTIONS
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING

from .store import Document, ProductStore


def _bson_default(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return json_util.default(value, json_options=RELAXED_JSON_OPTIONS)


def _normalize(document: Document) -> Document:
    """Render BSON values at any depth as plain JSON types.

    ObjectIds become hex strings; every other BSON type uses MongoDB relaxed
    extended JSON, e.g. ``{"$numberDecimal": "9.99"}``.
    """
    return json.loads(json.dumps(document, default=_bson_default))


class MongoProductStore(ProductStore):
    """Motor-backed implementation of :class:`ProductStore`."""

    def __init__(self, client: AsyncIOMotorClient, collection: AsyncIOMotorCollection) -> None:
        self._client = client
        self._collection = collection

    @classmethod
    async def connect(
        cls,
        url: str,
        database: str = "catalogue",
        collection: str = "products",
        server_selection_timeout_ms: int = 5000,
    ) -> "MongoProductStore":
        client: AsyncIOMotorClient = AsyncIOMotorClient(
            url, serverSelectionTimeoutMS=server_selection_timeout_ms
        )
        store = cls(client, client[database][collection])
        try:
            # Motor connects lazily; force a round trip so failures surface here
            await store.ping()
        except Exception:
            client.close()
            raise
        return store

    async def ping(self) -> None:
        await self._client.admin.command("ping")

    async def close(self) -> None:
        self._client.close()

    async def find_all(self) -> List[Document]:
        cursor = self._collection.find({})
        return [_normalize(doc) async for doc in cursor]

    async def find_one_by_sku(self, sku: str) -> Optional[Document]:
        document = await self._collection.find_one({"sku": sku})
        return _normalize(document) if document is not None else None

    async def find_by_category(self, category: str) -> List[Document]:
        cursor = self._collection.find({"categories": category}).sort("name", ASCENDING)
        return [_normalize(doc) async for doc in cursor]

    async def distinct_categories(self) -> List[str]:
        return await self._collection.distinct("categories")

    async def text_search(self, text: str) -> List[Document]:
        cursor = self._collection.find({"$text": {"$search": text}})
        return [_normalize(doc) async for doc in cursor]


__all__ = ["MongoProductStore"]
