"""Classification pass data model definitions."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from docvault.models.document import DocumentStatus


class ClassificationOutcome(str, Enum):
    """What happened to a single document during a classification pass."""

    PERSISTED = "persisted"
    COMPUTED_ONLY = "computed_only"
    FAILED = "failed"


class Classification(BaseModel):
    category: str
    subcategory: str
    confidence: int
    keywords: List[str] = Field(default_factory=list)


class ClassificationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    filename: str
    title: str
    predicted_category: Optional[str] = Field(None, alias="predictedCategory")
    predicted_subcategory: Optional[str] = Field(None, alias="predictedSubcategory")
    confidence: Optional[int] = None
    keywords: List[str] = Field(default_factory=list)
    status: DocumentStatus = DocumentStatus.CLASSIFIED
    outcome: ClassificationOutcome = ClassificationOutcome.PERSISTED
    error: Optional[str] = None


class ClassificationBatch(BaseModel):
    results: List[ClassificationResult] = Field(default_factory=list)

    @property
    def persisted(self) -> List[ClassificationResult]:
        return [result for result in self.results if result.outcome is ClassificationOutcome.PERSISTED]

    @property
    def unpersisted(self) -> List[ClassificationResult]:
        return [result for result in self.results if result.outcome is not ClassificationOutcome.PERSISTED]
