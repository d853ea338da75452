"""
Configuration management for the DocVault service.

This module centralizes environment-driven configuration using Pydantic's
`BaseSettings`. The API, the stores and the ingestion services all consume
the shared `settings` instance so every component sees the same values.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import AnyUrl, Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    # General application settings
    API_TITLE: str = "DocVault API"
    API_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field("development", pattern=r"^(development|staging|production)$")
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # Object storage
    STORAGE_BACKEND: str = Field("local", pattern=r"^(local|s3)$")
    S3_BUCKET_NAME: str = "cloud"
    S3_REGION: Optional[str] = None
    S3_ENDPOINT_URL: Optional[AnyUrl] = None
    LOCAL_STORAGE_PATH: Path = Field(default_factory=lambda: Path("storage"))

    # Metadata store
    MONGODB_URL: AnyUrl = Field("mongodb://localhost:27017")
    MONGODB_DATABASE: str = "docvault"
    DOCUMENTS_COLLECTION: str = "documents"

    # Ingestion behaviour
    SCRAPE_TIMEOUT_SECONDS: PositiveInt = 30
    ROLLBACK_ORPHANED_BLOBS: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def _split_origins(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache()
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


# Singleton-style settings instance for modules that prefer direct access.
settings = get_settings()
