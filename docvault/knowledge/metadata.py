"""Document metadata persistence."""

from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Protocol

from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from docvault.core.exceptions import MetadataError
from docvault.models import Document, NewDocument

logger = logging.getLogger(__name__)


class MetadataStore(Protocol):
    """Structured document records, queryable by title substring."""

    async def insert(self, record: NewDocument) -> Document:
        ...

    async def update(self, document_id: str, fields: Mapping[str, Any]) -> None:
        ...

    async def query_by_title_substring(self, text: str) -> List[Document]:
        ...

    async def list_all(self) -> List[Document]:
        ...


class MongoMetadataStore:
    """MetadataStore backed by a Motor collection."""

    def __init__(self, collection) -> None:
        self.collection = collection

    async def ensure_indexes(self) -> None:
        """Create the unique and sort indexes the store relies on. Safe to run repeatedly."""

        await self.collection.create_index("id", unique=True)
        await self.collection.create_index("filename", unique=True)
        await self.collection.create_index([("uploaded_at", DESCENDING)])
        logger.info("Ensured indexes on %s", self.collection.name)

    async def insert(self, record: NewDocument) -> Document:
        payload: Dict[str, Any] = record.model_dump(mode="json")
        payload["id"] = uuid.uuid4().hex
        payload["uploaded_at"] = datetime.now(timezone.utc)
        try:
            await self.collection.insert_one(dict(payload))
        except PyMongoError as exc:
            raise MetadataError(f"Failed to insert metadata for {record.filename}: {exc}") from exc
        return Document(**payload)

    async def update(self, document_id: str, fields: Mapping[str, Any]) -> None:
        try:
            await self.collection.update_one({"id": document_id}, {"$set": dict(fields)})
        except PyMongoError as exc:
            raise MetadataError(f"Failed to update document {document_id}: {exc}") from exc

    async def query_by_title_substring(self, text: str) -> List[Document]:
        query = {"title": {"$regex": re.escape(text), "$options": "i"}}
        return await self._find(query, sort=[("uploaded_at", DESCENDING)])

    async def list_all(self) -> List[Document]:
        return await self._find({})

    async def _find(self, query: Dict[str, Any], sort=None) -> List[Document]:
        try:
            cursor = self.collection.find(query, {"_id": False})
            if sort:
                cursor = cursor.sort(sort)
            return [Document(**row) async for row in cursor]
        except PyMongoError as exc:
            raise MetadataError(f"Failed to query documents: {exc}") from exc
