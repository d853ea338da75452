"""Document ingestion pipeline."""

from __future__ import annotations

import logging
from typing import Optional

from docvault.core.exceptions import MetadataError, StorageError, ValidationError
from docvault.knowledge.ingestion.fetcher import SourceFetcher
from docvault.knowledge.ingestion.naming import FALLBACK_BASE_NAME, sanitize_file_name, split_extension
from docvault.knowledge.ingestion.storage import BlobStore
from docvault.knowledge.metadata import MetadataStore
from docvault.models import IngestionResult, NewDocument
from docvault.utils.monitoring import documents_ingested_total

logger = logging.getLogger(__name__)

SCRAPE_DEFAULTS = ("Web", "Scraped")
UPLOAD_DEFAULTS = ("Uncategorized", "Unsorted")


class IngestionService:
    """Write a document's bytes to the blob store, then record its metadata.

    The two writes are not transactional. When the metadata insert fails the
    blob stays behind unless ``rollback_on_metadata_failure`` is set, in which
    case the blob is deleted before the error propagates.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        metadata_store: MetadataStore,
        fetcher: Optional[SourceFetcher] = None,
        *,
        rollback_on_metadata_failure: bool = False,
    ) -> None:
        self.blob_store = blob_store
        self.metadata_store = metadata_store
        self.fetcher = fetcher or SourceFetcher()
        self.rollback_on_metadata_failure = rollback_on_metadata_failure

    async def ingest_from_url(self, url: Optional[str]) -> IngestionResult:
        if not url:
            raise ValidationError("Missing URL")

        fetched = await self.fetcher.fetch(url)
        base_name = sanitize_file_name(fetched.filename) or FALLBACK_BASE_NAME
        filename = f"{base_name}{fetched.extension}"

        await self._persist(
            filename=filename,
            title=base_name,
            content=fetched.content,
            content_type=fetched.content_type,
            defaults=SCRAPE_DEFAULTS,
            allow_overwrite=True,
            source="scrape",
        )
        return IngestionResult(message="Success", filename=filename)

    async def ingest_from_upload(
        self,
        content: Optional[bytes],
        original_name: Optional[str],
        content_type: Optional[str],
    ) -> IngestionResult:
        if content is None or not original_name:
            raise ValidationError("Missing file")

        base_name = sanitize_file_name(original_name) or FALLBACK_BASE_NAME
        filename = f"{base_name}.{split_extension(original_name)}"

        await self._persist(
            filename=filename,
            title=base_name,
            content=content,
            content_type=content_type or "application/octet-stream",
            defaults=UPLOAD_DEFAULTS,
            allow_overwrite=False,
            source="upload",
        )
        return IngestionResult(message="Upload successful", filename=filename)

    async def _persist(
        self,
        *,
        filename: str,
        title: str,
        content: bytes,
        content_type: str,
        defaults: tuple[str, str],
        allow_overwrite: bool,
        source: str,
    ) -> None:
        await self.blob_store.put(filename, content, content_type, allow_overwrite=allow_overwrite)

        classification, subcategory = defaults
        record = NewDocument(
            filename=filename,
            title=title,
            classification=classification,
            subcategory=subcategory,
            size=len(content),
        )
        try:
            await self.metadata_store.insert(record)
        except MetadataError:
            logger.error("Metadata insert failed for %s after the blob write", filename)
            if self.rollback_on_metadata_failure:
                await self._remove_orphan(filename)
            raise

        documents_ingested_total.labels(source=source).inc()
        logger.info("Ingested %s from %s (%d bytes)", filename, source, len(content))

    async def _remove_orphan(self, filename: str) -> None:
        try:
            await self.blob_store.delete(filename)
        except StorageError as exc:
            logger.error("Rollback of orphaned blob %s failed: %s", filename, exc)
        else:
            logger.info("Rolled back orphaned blob %s", filename)
