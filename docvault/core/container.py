"""Process-wide service wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from docvault.core.config import Settings, settings as default_settings
from docvault.core.database import DatabaseManager
from docvault.knowledge.classification.service import ClassificationService
from docvault.knowledge.ingestion.fetcher import SourceFetcher
from docvault.knowledge.ingestion.pipeline import IngestionService
from docvault.knowledge.ingestion.storage import build_blob_store
from docvault.knowledge.metadata import MongoMetadataStore
from docvault.knowledge.retrieval.search import SearchService


@dataclass
class ServiceContainer:
    """Services built once at startup and shared by every request."""

    ingestion: IngestionService
    search: SearchService
    classification: ClassificationService
    database: Optional[DatabaseManager] = None

    @classmethod
    async def create(cls, settings: Optional[Settings] = None) -> "ServiceContainer":
        settings = settings or default_settings
        database = DatabaseManager(settings)
        await database.initialize()

        metadata_store = MongoMetadataStore(database.documents_collection())
        ingestion = IngestionService(
            build_blob_store(settings),
            metadata_store,
            SourceFetcher(timeout=settings.SCRAPE_TIMEOUT_SECONDS),
            rollback_on_metadata_failure=settings.ROLLBACK_ORPHANED_BLOBS,
        )
        return cls(
            ingestion=ingestion,
            search=SearchService(metadata_store),
            classification=ClassificationService(metadata_store),
            database=database,
        )

    async def close(self) -> None:
        if self.database is not None:
            await self.database.close()
