from __future__ import annotations

from fastapi import Request

from docvault.core.container import ServiceContainer
from docvault.knowledge.classification.service import ClassificationService
from docvault.knowledge.ingestion.pipeline import IngestionService
from docvault.knowledge.retrieval.search import SearchService


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


async def get_ingestion_service(request: Request) -> IngestionService:
    return get_services(request).ingestion


async def get_search_service(request: Request) -> SearchService:
    return get_services(request).search


async def get_classification_service(request: Request) -> ClassificationService:
    return get_services(request).classification
