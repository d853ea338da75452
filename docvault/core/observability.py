"""Logging initialization helpers for DocVault services."""

from __future__ import annotations

import logging
from typing import Optional

from docvault.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_LOGGING_INITIALIZED = False


def configure_logging(level: Optional[str] = None) -> None:
    """Install the root handler once; later calls only adjust the level."""

    global _LOGGING_INITIALIZED
    resolved = (level or settings.LOG_LEVEL or "INFO").upper()
    if not _LOGGING_INITIALIZED:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
        _LOGGING_INITIALIZED = True
        logging.getLogger(__name__).info("Logging initialized at %s", resolved)
    else:
        logging.getLogger().setLevel(resolved)


__all__ = ["configure_logging"]
