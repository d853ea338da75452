"""Batch classification of every stored document."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from docvault.core.exceptions import MetadataError
from docvault.knowledge.classification.classifier import Classifier, RoundRobinClassifier
from docvault.knowledge.metadata import MetadataStore
from docvault.models import (
    Classification,
    ClassificationBatch,
    ClassificationOutcome,
    ClassificationResult,
    Document,
    DocumentStatus,
)
from docvault.utils.monitoring import classification_outcomes_total

logger = logging.getLogger(__name__)


class ClassificationService:
    def __init__(self, metadata_store: MetadataStore, classifier: Optional[Classifier] = None) -> None:
        self.metadata_store = metadata_store
        self.classifier = classifier or RoundRobinClassifier()

    async def classify_all(self) -> ClassificationBatch:
        """Classify every document and persist the assignments concurrently.

        Documents are classified in the order the store returns them. A failed
        update is logged and reported as ``computed_only``; it never aborts the
        rest of the batch.
        """

        documents = await self.metadata_store.list_all()
        self.classifier.begin_batch()

        pending = []
        for document in documents:
            try:
                classification = self.classifier.classify(document)
            except Exception as exc:
                logger.exception("Classifier failed for document %s", document.id)
                pending.append(self._failed(document, exc))
                continue
            pending.append(self._apply(document, classification))

        results: List[ClassificationResult] = await asyncio.gather(*pending)
        for result in results:
            classification_outcomes_total.labels(outcome=result.outcome.value).inc()

        logger.info(
            "Classified %d documents (%d not persisted)",
            len(results),
            sum(1 for result in results if result.outcome is not ClassificationOutcome.PERSISTED),
        )
        return ClassificationBatch(results=results)

    async def _apply(self, document: Document, classification: Classification) -> ClassificationResult:
        result = ClassificationResult(
            id=document.id,
            filename=document.filename,
            title=document.title,
            predicted_category=classification.category,
            predicted_subcategory=classification.subcategory,
            confidence=classification.confidence,
            keywords=classification.keywords,
            status=DocumentStatus.CLASSIFIED,
        )
        try:
            await self.metadata_store.update(
                document.id,
                {
                    "classification": classification.category,
                    "subcategory": classification.subcategory,
                    "confidence": classification.confidence,
                    "keywords": classification.keywords,
                    "status": DocumentStatus.CLASSIFIED.value,
                },
            )
        except MetadataError as exc:
            logger.error("Update failed for ID %s: %s", document.id, exc.message)
            result.outcome = ClassificationOutcome.COMPUTED_ONLY
            result.error = exc.message
        return result

    async def _failed(self, document: Document, exc: Exception) -> ClassificationResult:
        return ClassificationResult(
            id=document.id,
            filename=document.filename,
            title=document.title,
            status=document.status,
            outcome=ClassificationOutcome.FAILED,
            error=str(exc),
        )
