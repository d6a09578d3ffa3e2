"""Non-resolving loader: absolute ``file``/``http``/``https``/``data`` URIs only."""

from __future__ import annotations

from contextlib import aclosing
from typing import Any, AsyncIterator, Mapping

from resource_loader.core.trace import TraceContext, stage_timer
from resource_loader.libs.loader.base_loader import ResourceLoader, select_transport
from resource_loader.libs.transport import BaseTransport, TransportFactory
from resource_loader.observability.logger import get_logger

logger = get_logger("resource_loader.loader.default")


class DefaultLoader(ResourceLoader):
    """Hands each URI to the transport registered for its scheme, unchanged.

    Relative references and ``package:`` URIs are rejected before any
    transport is touched.
    """

    def __init__(
        self,
        settings: Any = None,
        *,
        transports: Mapping[str, BaseTransport] | None = None,
        **_: Any,
    ) -> None:
        self.settings = settings
        self.transports = transports if transports is not None else TransportFactory.create_all(settings)

    def _dispatch(self, uri: str, trace: TraceContext | None) -> BaseTransport:
        with stage_timer(trace, "dispatch") as stage:
            transport = select_transport(self.transports, uri)
            stage.update(uri=uri, transport=type(transport).__name__)
        logger.debug("Dispatching %s to %s", uri, type(transport).__name__)
        return transport

    async def open_read(self, uri: str, trace: TraceContext | None = None) -> AsyncIterator[bytes]:
        transport = self._dispatch(uri, trace)
        with stage_timer(trace, "fetch") as stage:
            size = 0
            async with aclosing(transport.open_read(uri)) as chunks:
                async for chunk in chunks:
                    size += len(chunk)
                    yield chunk
            stage.update(uri=uri, size=size)

    async def read_as_bytes(self, uri: str, trace: TraceContext | None = None) -> bytes:
        transport = self._dispatch(uri, trace)
        with stage_timer(trace, "fetch") as stage:
            content = await transport.read_as_bytes(uri)
            stage.update(uri=uri, size=len(content))
        return content

    async def read_as_string(
        self,
        uri: str,
        encoding: str | None = None,
        trace: TraceContext | None = None,
    ) -> str:
        transport = self._dispatch(uri, trace)
        with stage_timer(trace, "fetch") as stage:
            text = await transport.read_as_string(uri, encoding)
            stage.update(uri=uri, characters=len(text))
        return text
