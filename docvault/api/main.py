"""FastAPI application entrypoint for DocVault."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from docvault.api.middleware.logging import LoggingMiddleware
from docvault.api.routes import admin, ingestion, query
from docvault.core.config import settings
from docvault.core.container import ServiceContainer
from docvault.core.exceptions import ApplicationError
from docvault.core.observability import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the shared services on startup and release them on shutdown."""

    configure_logging()
    services = await ServiceContainer.create(settings)
    app.state.services = services

    try:
        yield
    finally:
        await services.close()


app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)

# Routers
app.include_router(ingestion.router, prefix="/api")
app.include_router(query.router, prefix="/api")
app.include_router(admin.router, prefix="/api")

app.mount("/metrics", make_asgi_app())


@app.exception_handler(ApplicationError)
async def handle_application_error(_: Request, exc: ApplicationError):
    """Return standardized responses for application layer exceptions."""

    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(_: Request, exc: RequestValidationError):
    """Malformed request bodies are caller errors, reported like any other validation failure."""

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body", "code": "validation_error", "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError):
    return [{"loc": list(error.get("loc", ())), "msg": error.get("msg", "")} for error in exc.errors()]
