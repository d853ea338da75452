"""FastAPI routes for scrape and upload ingestion."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel, Field

from docvault.api.dependencies import get_ingestion_service
from docvault.knowledge.ingestion.pipeline import IngestionService
from docvault.models import IngestionResult

router = APIRouter(tags=["ingestion"])


class ScrapeRequest(BaseModel):
    url: Optional[str] = Field(None, description="HTTP(S) URL of a PDF or Word document")


@router.post("/scrape", response_model=IngestionResult)
async def scrape_document(
    request: Optional[ScrapeRequest] = None,
    service: IngestionService = Depends(get_ingestion_service),
) -> IngestionResult:
    """
    Fetch a remote document and store it.

    Only `application/pdf` and Word content types are accepted. An existing
    document with the same derived filename is overwritten.
    """
    return await service.ingest_from_url(request.url if request else None)


@router.post("/upload", response_model=IngestionResult)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    service: IngestionService = Depends(get_ingestion_service),
) -> IngestionResult:
    """
    Store a document sent as multipart field `file`.

    Uploads never overwrite an existing document with the same derived filename.
    """
    if file is None:
        return await service.ingest_from_upload(None, None, None)

    content = await file.read()
    return await service.ingest_from_upload(content, file.filename, file.content_type)
