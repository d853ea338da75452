"""Search and classification endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from docvault.api.dependencies import get_classification_service, get_search_service
from docvault.knowledge.classification.service import ClassificationService
from docvault.knowledge.retrieval.search import SearchService
from docvault.models import ClassificationResult, SearchResult

router = APIRouter(tags=["documents"])


class SearchRequest(BaseModel):
    query: Optional[str] = Field(None, description="Case-insensitive title substring, at least 2 characters")


class SearchResponse(BaseModel):
    results: List[SearchResult]


class ClassificationResponse(BaseModel):
    results: List[ClassificationResult]


@router.post("/search", response_model=SearchResponse, response_model_by_alias=True)
async def search_documents(
    request: Optional[SearchRequest] = None,
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    """Return documents whose title contains the query, newest first."""

    results = await service.search(request.query if request else None)
    return SearchResponse(results=results)


@router.post("/classify", response_model=ClassificationResponse, response_model_by_alias=True)
async def classify_documents(
    service: ClassificationService = Depends(get_classification_service),
) -> ClassificationResponse:
    """Run a classification pass over every stored document."""

    batch = await service.classify_all()
    return ClassificationResponse(results=batch.results)
