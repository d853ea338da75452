"""Administrative endpoints for DocVault."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

from docvault.core.config import settings

router = APIRouter(tags=["admin"])


@router.get("/health")
async def healthcheck() -> Dict[str, str]:
    """Liveness check."""

    return {"status": "ok", "environment": settings.ENVIRONMENT}
