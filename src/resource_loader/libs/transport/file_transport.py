"""Local filesystem transport for ``file:`` URIs."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import AsyncIterator
from urllib.parse import urlsplit
from urllib.request import url2pathname

from resource_loader.core.errors import TransportError, UnsupportedSchemeError
from resource_loader.libs.transport.base_transport import BaseTransport, FetchResult
from resource_loader.observability.logger import get_logger

logger = get_logger("resource_loader.transport.file")

_LOCAL_HOSTS = {"", "localhost"}


class FileTransport(BaseTransport):
    """Reads resources from the local filesystem.

    Blocking reads run in a worker thread so the event loop never stalls.
    """

    SCHEMES = frozenset({"file"})

    @staticmethod
    def to_path(uri: str) -> Path:
        parsed = urlsplit(uri)
        if parsed.scheme.lower() != "file":
            raise UnsupportedSchemeError(parsed.scheme, uri)
        if parsed.netloc.lower() not in _LOCAL_HOSTS:
            raise TransportError("file", uri, f"Remote file host '{parsed.netloc}' is not supported")
        return Path(url2pathname(parsed.path))

    async def open_read(self, uri: str) -> AsyncIterator[bytes]:
        path = self.to_path(uri)
        try:
            handle = await asyncio.to_thread(path.open, "rb")
        except OSError as error:
            logger.debug("Cannot open %s: %s", path, error)
            raise TransportError("file", uri, f"Cannot open file: {error}") from error

        try:
            while True:
                try:
                    chunk = await asyncio.to_thread(handle.read, self.chunk_size)
                except OSError as error:
                    raise TransportError("file", uri, f"Read failed: {error}") from error
                if not chunk:
                    break
                yield chunk
        finally:
            handle.close()

    async def fetch(self, uri: str) -> FetchResult:
        path = self.to_path(uri)
        try:
            content = await asyncio.to_thread(path.read_bytes)
        except OSError as error:
            logger.debug("Cannot read %s: %s", path, error)
            raise TransportError("file", uri, f"Cannot read file: {error}") from error
        return FetchResult(content=content)
