"""Database connectivity layer for DocVault."""

from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from docvault.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the MongoDB client for the lifetime of the process."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings
        self.mongodb: Optional[AsyncIOMotorClient] = None

    async def initialize(self) -> None:
        if self.mongodb is not None:
            return
        logger.info("Connecting to MongoDB database %s", self.settings.MONGODB_DATABASE)
        self.mongodb = AsyncIOMotorClient(str(self.settings.MONGODB_URL), tz_aware=True)

    def documents_collection(self):
        if self.mongodb is None:
            raise RuntimeError("DatabaseManager.initialize() must be awaited first")
        return self.mongodb[self.settings.MONGODB_DATABASE][self.settings.DOCUMENTS_COLLECTION]

    async def close(self) -> None:
        logger.info("Closing database connections")
        if self.mongodb is not None:
            self.mongodb.close()
            self.mongodb = None
