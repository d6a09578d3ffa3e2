"""Transport contract: byte delivery for one family of URI schemes.

Every transport offers the same three shapes the loaders expose
(stream, full bytes, full text). Only ``open_read`` and ``fetch`` are
scheme specific; text decoding is shared and follows the default charset
policy in ``resource_loader.core.charset``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, AsyncIterator, ClassVar

from resource_loader.core.charset import require_encoding, select_charset
from resource_loader.core.errors import TransportError
from resource_loader.core.settings import DEFAULT_CHUNK_SIZE
from resource_loader.core.uri import scheme_of


@dataclass(frozen=True)
class FetchResult:
    """Full content of a resource plus the charset its metadata declares."""

    content: bytes
    charset: str | None = None


class BaseTransport(ABC):
    """Abstract transport for absolute URIs of the schemes in ``SCHEMES``."""

    SCHEMES: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, settings: Any = None, **_: Any) -> None:
        self.settings = settings
        loader_settings = getattr(settings, "loader", None)
        self.chunk_size = int(getattr(loader_settings, "chunk_size", DEFAULT_CHUNK_SIZE))

    def supports(self, uri: str) -> bool:
        return scheme_of(uri) in self.SCHEMES

    @abstractmethod
    def open_read(self, uri: str) -> AsyncIterator[bytes]:
        """Stream the resource as byte chunks in order."""

    @abstractmethod
    async def fetch(self, uri: str) -> FetchResult:
        """Retrieve the whole resource and its declared charset."""

    async def read_as_bytes(self, uri: str) -> bytes:
        result = await self.fetch(uri)
        return result.content

    async def read_as_string(self, uri: str, encoding: str | None = None) -> str:
        """Retrieve the whole resource and decode it.

        An explicit ``encoding`` wins; otherwise the charset is picked from the
        URI scheme and whatever the resource declared.
        """

        codec = require_encoding(encoding) if encoding is not None else None
        scheme = scheme_of(uri)
        result = await self.fetch(uri)
        if codec is None:
            codec = select_charset(scheme, result.charset)

        try:
            return result.content.decode(codec)
        except UnicodeDecodeError as error:
            raise TransportError(scheme, uri, f"Cannot decode content as {codec}: {error}") from error
