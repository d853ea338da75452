"""Document data model definitions."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentStatus(str, Enum):
    """Lifecycle of a stored document. Only moves forward."""

    PROCESSED = "processed"
    CLASSIFIED = "classified"


class Document(BaseModel):
    id: str
    filename: str
    title: str
    classification: str = "Uncategorized"
    subcategory: str = "Unsorted"
    size: int = 0
    status: DocumentStatus = DocumentStatus.PROCESSED
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    confidence: Optional[int] = None
    keywords: Optional[List[str]] = None


class NewDocument(BaseModel):
    """Metadata record written at ingestion time, before the store assigns `id` and `uploaded_at`."""

    filename: str
    title: str
    classification: str
    subcategory: str
    size: int
    status: DocumentStatus = DocumentStatus.PROCESSED


class IngestionResult(BaseModel):
    message: str
    filename: str


class SearchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    filename: str
    classification: str
    upload_date: datetime = Field(..., alias="uploadDate")
    matched_keywords: List[str] = Field(default_factory=list, alias="matchedKeywords")
    preview: str
    highlighted_preview: str = Field(..., alias="highlightedPreview")
