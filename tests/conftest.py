from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Set

import httpx
import pytest

from docvault.core.exceptions import MetadataError, StorageError
from docvault.knowledge.ingestion.fetcher import SourceFetcher
from docvault.models import Document, NewDocument

BASE_TIME = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)


class InMemoryBlobStore:
    def __init__(self, *, fail_put: bool = False) -> None:
        self.blobs: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.put_calls: List[str] = []
        self.deleted: List[str] = []
        self.fail_put = fail_put

    async def put(self, key: str, content: bytes, content_type: str, *, allow_overwrite: bool = True) -> str:
        self.put_calls.append(key)
        if self.fail_put:
            raise StorageError("bucket unavailable")
        if not allow_overwrite and key in self.blobs:
            raise StorageError(f"The resource already exists: {key}")
        self.blobs[key] = content
        self.content_types[key] = content_type
        return f"memory://{key}"

    async def delete(self, key: str) -> None:
        self.deleted.append(key)
        self.blobs.pop(key, None)


class InMemoryMetadataStore:
    def __init__(self, *, fail_insert: bool = False, failing_updates: Optional[Set[str]] = None) -> None:
        self.documents: List[Document] = []
        self.updates: List[tuple[str, Dict[str, Any]]] = []
        self.fail_insert = fail_insert
        self.failing_updates = failing_updates or set()

    def add(self, title: str, *, filename: Optional[str] = None, uploaded_at: Optional[datetime] = None) -> Document:
        document = Document(
            id=f"doc-{len(self.documents) + 1}",
            filename=filename or f"{title}.pdf",
            title=title,
            uploaded_at=uploaded_at or BASE_TIME + timedelta(minutes=len(self.documents)),
        )
        self.documents.append(document)
        return document

    async def insert(self, record: NewDocument) -> Document:
        if self.fail_insert:
            raise MetadataError("duplicate key value violates unique constraint")
        document = Document(
            id=f"doc-{len(self.documents) + 1}",
            uploaded_at=BASE_TIME + timedelta(minutes=len(self.documents)),
            **record.model_dump(),
        )
        self.documents.append(document)
        return document

    async def update(self, document_id: str, fields: Mapping[str, Any]) -> None:
        if document_id in self.failing_updates:
            raise MetadataError(f"row {document_id} is locked")
        self.updates.append((document_id, dict(fields)))
        for index, document in enumerate(self.documents):
            if document.id == document_id:
                self.documents[index] = document.model_copy(update=dict(fields))

    async def query_by_title_substring(self, text: str) -> List[Document]:
        needle = text.lower()
        matches = [doc for doc in self.documents if needle in doc.title.lower()]
        return sorted(matches, key=lambda doc: doc.uploaded_at, reverse=True)

    async def list_all(self) -> List[Document]:
        return list(self.documents)

    def get(self, document_id: str) -> Document:
        return next(doc for doc in self.documents if doc.id == document_id)


def mock_fetcher(status_code: int = 200, headers: Optional[Dict[str, str]] = None, content: bytes = b"%PDF-1.7") -> SourceFetcher:
    requested: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(status_code, headers=headers or {}, content=content)

    fetcher = SourceFetcher(transport=httpx.MockTransport(handler))
    fetcher.requested = requested
    return fetcher


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def metadata_store() -> InMemoryMetadataStore:
    return InMemoryMetadataStore()
