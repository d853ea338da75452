"""Filename helpers shared by the scrape and upload ingestion paths."""

from __future__ import annotations

import re

MAX_BASE_NAME_LENGTH = 50
FALLBACK_BASE_NAME = "untitled"

_TRAILING_EXTENSION = re.compile(r"\.[^/.]+$")
_UNSAFE_CHARACTERS = re.compile(r"[^A-Za-z0-9_\-]")


def sanitize_file_name(name: str) -> str:
    """Reduce ``name`` to a storage-safe base name.

    The trailing extension is dropped, anything outside ``[A-Za-z0-9_-]`` is
    removed and the result is capped at 50 characters. The result can be
    empty; callers substitute ``FALLBACK_BASE_NAME``.
    """

    without_extension = _TRAILING_EXTENSION.sub("", name or "")
    return _UNSAFE_CHARACTERS.sub("", without_extension)[:MAX_BASE_NAME_LENGTH]


def split_extension(name: str) -> str:
    """Return the text after the last dot, or the whole name when there is none."""

    return (name or "").rsplit(".", 1)[-1]
