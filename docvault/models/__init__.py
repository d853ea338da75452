from .classification import Classification, ClassificationBatch, ClassificationOutcome, ClassificationResult
from .document import Document, DocumentStatus, IngestionResult, NewDocument, SearchResult

__all__ = [
    "Classification",
    "ClassificationBatch",
    "ClassificationOutcome",
    "ClassificationResult",
    "Document",
    "DocumentStatus",
    "IngestionResult",
    "NewDocument",
    "SearchResult",
]
