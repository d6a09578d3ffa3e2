"""Resource loader contract.

A loader fetches the content located by a URI. Implementations decide which
URI forms they accept; all of them expose the same three operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator, Mapping

from resource_loader.core.errors import InvalidReferenceError, UnsupportedSchemeError
from resource_loader.core.trace import TraceContext
from resource_loader.core.uri import scheme_of
from resource_loader.libs.transport.base_transport import BaseTransport


class ResourceLoader(ABC):
    """Abstract loader for URI-addressed resources."""

    @abstractmethod
    def open_read(self, uri: str, trace: TraceContext | None = None) -> AsyncIterator[bytes]:
        """Read the resource at ``uri`` as an async stream of byte chunks.

        The stream is single pass; call again for a fresh one. Failures are
        raised when the stream is first iterated.
        """

    @abstractmethod
    async def read_as_bytes(self, uri: str, trace: TraceContext | None = None) -> bytes:
        """Read the whole resource at ``uri`` as bytes."""

    @abstractmethod
    async def read_as_string(
        self,
        uri: str,
        encoding: str | None = None,
        trace: TraceContext | None = None,
    ) -> str:
        """Read the whole resource at ``uri`` as text.

        Bytes are decoded with ``encoding`` when given. Otherwise ``file:``
        defaults to UTF-8; ``http:``/``https:`` use the Content-Type charset
        if recognized, else Latin-1; ``data:`` uses its declared charset if
        recognized, else ASCII.
        """


def select_transport(transports: Mapping[str, BaseTransport], uri: str) -> BaseTransport:
    """Pick the transport for an absolute ``uri``.

    Relative references raise ``InvalidReferenceError``; schemes without a
    transport raise ``UnsupportedSchemeError``.
    """

    scheme = scheme_of(uri)
    if not scheme:
        raise InvalidReferenceError(uri)

    transport = transports.get(scheme)
    if transport is None:
        raise UnsupportedSchemeError(scheme, uri)
    return transport
