"""Object storage abstraction for raw document persistence."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from docvault.core.config import Settings
from docvault.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Keyed byte storage. Keys are the sanitized document filenames."""

    async def put(self, key: str, content: bytes, content_type: str, *, allow_overwrite: bool = True) -> str:
        ...

    async def delete(self, key: str) -> None:
        ...


class LocalBlobStore:
    """Persist documents under a directory on local disk."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    async def put(self, key: str, content: bytes, content_type: str, *, allow_overwrite: bool = True) -> str:
        destination = self.root / key

        def write() -> None:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with open(destination, "wb" if allow_overwrite else "xb") as handle:
                handle.write(content)

        try:
            await asyncio.to_thread(write)
        except FileExistsError as exc:
            raise StorageError(f"The resource already exists: {key}") from exc
        except OSError as exc:
            raise StorageError(f"Local write failed: {exc}") from exc

        logger.debug("Stored %s (%s, %d bytes) at %s", key, content_type, len(content), destination)
        return str(destination.resolve())

    async def delete(self, key: str) -> None:
        destination = self.root / key
        try:
            await asyncio.to_thread(destination.unlink, True)
        except OSError as exc:
            raise StorageError(f"Local delete failed: {exc}") from exc


class S3BlobStore:
    """Persist documents to an S3 (or S3-compatible) bucket."""

    def __init__(self, bucket: str, *, region: Optional[str] = None, endpoint_url: Optional[str] = None, client=None) -> None:
        self.bucket = bucket
        self._s3 = client or boto3.client("s3", region_name=region, endpoint_url=endpoint_url)

    async def put(self, key: str, content: bytes, content_type: str, *, allow_overwrite: bool = True) -> str:
        params = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": content,
            "ContentType": content_type or "application/octet-stream",
        }
        if not allow_overwrite:
            # Conditional write: S3 answers 412 when the key already exists.
            params["IfNoneMatch"] = "*"

        def upload() -> None:
            try:
                self._s3.put_object(**params)
            except ClientError as exc:
                code = exc.response.get("Error", {}).get("Code")
                if code in {"PreconditionFailed", "ConditionalRequestConflict"}:
                    raise StorageError(f"The resource already exists: {key}") from exc
                raise StorageError(f"S3 upload failed: {exc}") from exc
            except BotoCoreError as exc:
                raise StorageError(f"S3 upload failed: {exc}") from exc

        await asyncio.to_thread(upload)
        return f"s3://{self.bucket}/{key}"

    async def delete(self, key: str) -> None:
        def remove() -> None:
            try:
                self._s3.delete_object(Bucket=self.bucket, Key=key)
            except (ClientError, BotoCoreError) as exc:
                raise StorageError(f"S3 delete failed: {exc}") from exc

        await asyncio.to_thread(remove)


def build_blob_store(settings: Settings) -> BlobStore:
    backend = (settings.STORAGE_BACKEND or "local").lower()
    if backend == "s3":
        if not settings.S3_BUCKET_NAME:
            raise StorageError("S3 storage requested but configuration is incomplete")
        return S3BlobStore(
            settings.S3_BUCKET_NAME,
            region=settings.S3_REGION,
            endpoint_url=str(settings.S3_ENDPOINT_URL) if settings.S3_ENDPOINT_URL else None,
        )
    return LocalBlobStore(Path(settings.LOCAL_STORAGE_PATH))
