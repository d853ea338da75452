"""Custom exception hierarchy for DocVault."""

from __future__ import annotations

from fastapi import status


class ApplicationError(Exception):
    """Base application error with HTTP semantics."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "application_error"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message


class ValidationError(ApplicationError):
    """Missing or malformed caller input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class FetchError(ApplicationError):
    """The remote URL was unreachable or answered with a non-success status."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "fetch_error"


class UnsupportedTypeError(ApplicationError):
    """The fetched content-type is neither PDF nor Word."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "unsupported_type"


class StorageError(ApplicationError):
    """Raised when a document cannot be persisted to object storage."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "storage_error"


class MetadataError(ApplicationError):
    """Raised when the metadata store rejects a read or a write."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "metadata_error"
