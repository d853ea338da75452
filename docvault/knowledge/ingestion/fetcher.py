"""Remote document retrieval for the scrape ingestion path."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

import httpx

from docvault.core.exceptions import FetchError, UnsupportedTypeError

logger = logging.getLogger(__name__)

_DISPOSITION_FILENAME = re.compile(r"filename[^;=\n]*=((['\"]).*?\2|[^;\n]*)", re.IGNORECASE)


@dataclass
class FetchedDocument:
    content: bytes
    extension: str
    filename: str
    content_type: str


class SourceFetcher:
    """Download a URL and accept it only when it is a PDF or Word document."""

    def __init__(self, *, timeout: float = 30, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, url: str) -> FetchedDocument:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Fetching %s failed: %s", url, exc)
            raise FetchError("Failed to fetch file") from exc

        if not response.is_success:
            logger.warning("Fetching %s returned HTTP %s", url, response.status_code)
            raise FetchError("Failed to fetch file")

        content_type = response.headers.get("content-type", "")
        extension = self.extension_for(content_type)
        if not extension:
            raise UnsupportedTypeError("Unsupported file type")

        filename = extract_file_name(url, response.headers.get("content-disposition"))
        if not filename:
            filename = f"scraped{int(time.time() * 1000)}{extension}"

        return FetchedDocument(
            content=response.content,
            extension=extension,
            filename=filename,
            content_type=content_type,
        )

    @staticmethod
    def extension_for(content_type: str) -> str:
        if "pdf" in content_type:
            return ".pdf"
        if "word" in content_type:
            return ".docx"
        return ""


def extract_file_name(url: str, content_disposition: Optional[str]) -> Optional[str]:
    """Pick a display filename from the content-disposition header, then the URL path."""

    if content_disposition:
        match = _DISPOSITION_FILENAME.search(content_disposition)
        if match and match.group(1):
            return match.group(1).replace('"', "").replace("'", "")

    try:
        path = urlsplit(url).path
    except ValueError:
        return None
    last_segment = path.split("/")[-1]
    if "." in last_segment:
        return last_segment
    return None
