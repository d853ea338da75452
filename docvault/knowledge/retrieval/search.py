"""Keyword search over document metadata."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from docvault.core.exceptions import ValidationError
from docvault.knowledge.metadata import MetadataStore
from docvault.models import Document, SearchResult

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
HIGHLIGHT_OPEN = "<mark>"
HIGHLIGHT_CLOSE = "</mark>"


class SearchService:
    """Title substring search, newest first, with keyword highlighting."""

    def __init__(self, metadata_store: MetadataStore) -> None:
        self.metadata_store = metadata_store

    async def search(self, query: Optional[str]) -> List[SearchResult]:
        if not query or len(query) < MIN_QUERY_LENGTH:
            raise ValidationError("Invalid search query")

        documents = await self.metadata_store.query_by_title_substring(query)
        # Stable sort: equal timestamps keep the store's order.
        documents = sorted(documents, key=lambda doc: doc.uploaded_at, reverse=True)

        terms = query_terms(query)
        logger.debug("Search %r matched %d documents", query, len(documents))
        return [self._annotate(document, terms) for document in documents]

    def _annotate(self, document: Document, terms: Sequence[str]) -> SearchResult:
        preview = f"{document.title} - {document.filename}"
        return SearchResult(
            id=document.id,
            title=document.title,
            filename=document.filename,
            classification=document.classification,
            upload_date=document.uploaded_at,
            matched_keywords=matched_keywords(f"{document.title} {document.filename}", terms),
            preview=preview,
            highlighted_preview=highlight(preview, terms),
        )


def query_terms(query: str) -> List[str]:
    return query.lower().split()


def matched_keywords(text: str, terms: Sequence[str]) -> List[str]:
    haystack = text.lower()
    return [term for term in terms if term in haystack]


def highlight(text: str, terms: Sequence[str]) -> str:
    """Wrap every case-insensitive occurrence of any term in a <mark> tag.

    One alternation in term order is scanned left to right, so at a given
    position the first listed term wins and adjacent matches are marked
    separately rather than merged.
    """

    if not terms:
        return text
    pattern = re.compile("|".join(re.escape(term) for term in terms), re.IGNORECASE)
    return pattern.sub(lambda match: f"{HIGHLIGHT_OPEN}{match.group(0)}{HIGHLIGHT_CLOSE}", text)
