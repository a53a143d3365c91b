"""
sources.py — Where the raw electoral dataset comes from.

The loader only ever sees a ``DocumentSource``: anything with an async
``fetch_raw_document()`` returning the undecoded bytes. Which source is used
is decided by configuration in ``build_source`` rather than by sniffing the
runtime environment.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

import httpx

from ug_locations.config import Settings
from ug_locations.errors import LoadError

logger = logging.getLogger(__name__)


class DocumentSource(Protocol):
    async def fetch_raw_document(self) -> bytes:
        ...


class FileSource:
    """Reads the dataset from a local JSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    async def fetch_raw_document(self) -> bytes:
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as exc:
            logger.error("Dataset file not readable: %s", self.path)
            raise LoadError(f"Cannot read dataset file {self.path}: {exc}") from exc

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r})"


class HttpSource:
    """Fetches the dataset over HTTP(S)."""

    def __init__(self, url: str, timeout: float | None = None):
        self.url = url
        self.timeout = timeout

    async def fetch_raw_document(self) -> bytes:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Dataset fetch failed for %s: %s", self.url, exc)
            raise LoadError(f"Cannot fetch dataset from {self.url}: {exc}") from exc
        return response.content

    def __repr__(self) -> str:
        return f"HttpSource({self.url!r})"


def build_source(settings: Settings) -> DocumentSource:
    """Prefer ``data_url`` when configured, otherwise read ``data_path``."""
    if settings.data_url:
        return HttpSource(settings.data_url)
    return FileSource(settings.data_path)
