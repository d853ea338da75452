"""Initial setup script for DocVault infrastructure."""

from __future__ import annotations

import asyncio
import logging

from docvault.core.config import settings
from docvault.core.database import DatabaseManager
from docvault.knowledge.ingestion.storage import LocalBlobStore, build_blob_store
from docvault.knowledge.metadata import MongoMetadataStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def setup_mongodb(database: DatabaseManager) -> None:
    store = MongoMetadataStore(database.documents_collection())
    await store.ensure_indexes()


def setup_storage() -> None:
    store = build_blob_store(settings)
    if isinstance(store, LocalBlobStore):
        logger.info("Local blob storage ready at %s", store.root.resolve())
    else:
        logger.info("Using S3 bucket %s", settings.S3_BUCKET_NAME)


async def main() -> None:
    database = DatabaseManager(settings)
    await database.initialize()
    try:
        await setup_mongodb(database)
    finally:
        await database.close()
    setup_storage()
    logger.info("DocVault setup complete")


if __name__ == "__main__":
    asyncio.run(main())
