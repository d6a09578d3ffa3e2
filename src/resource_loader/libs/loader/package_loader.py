"""Resolving loader: accepts relative references and ``package:`` URIs.

Every operation first normalizes its URI with ``resolve_uri`` and then
dispatches exactly like ``DefaultLoader``:

1. ``package:`` URIs go to the package resolver; its answer is used as-is
   and must itself be absolute and not another ``package:`` URI.
2. Anything else is resolved against the base URI (a no-op for absolute URIs).
"""

from __future__ import annotations

from contextlib import aclosing
from typing import Any, AsyncIterator, Mapping

from resource_loader.core.errors import PackageResolutionError
from resource_loader.core.trace import TraceContext, stage_timer
from resource_loader.core.uri import (
    BaseUriProvider,
    Scheme,
    current_base_uri,
    fixed_base_uri,
    resolve_reference,
    scheme_of,
)
from resource_loader.libs.loader.base_loader import ResourceLoader, select_transport
from resource_loader.libs.package import BasePackageResolver, PackageResolverFactory
from resource_loader.libs.transport import BaseTransport, TransportFactory
from resource_loader.observability.logger import get_logger

logger = get_logger("resource_loader.loader.package")


async def resolve_uri(
    uri: str,
    *,
    resolver: BasePackageResolver | None = None,
    base_uri: BaseUriProvider | None = None,
) -> str:
    """Normalize ``uri`` into an absolute, directly loadable URI.

    ``resolver`` defaults to the importlib package resolver and ``base_uri``
    to the current working directory.
    """

    if scheme_of(uri) == Scheme.PACKAGE.value:
        active_resolver = resolver if resolver is not None else PackageResolverFactory.create()
        resolved = await active_resolver.resolve(uri)
        resolved_scheme = scheme_of(resolved)
        if resolved_scheme in (Scheme.NONE.value, Scheme.PACKAGE.value):
            raise PackageResolutionError(uri, f"resolver returned a non-loadable URI '{resolved}'")
        return resolved

    provider = base_uri if base_uri is not None else current_base_uri
    return resolve_reference(provider(), uri)


class PackageLoader(ResourceLoader):
    """Loader that resolves relative and ``package:`` URIs before loading.

    Collaborators (all optional):
    - transports: ``scheme -> transport`` mapping, default from ``TransportFactory``
    - resolver: package resolver, default from ``settings.packages.resolver``
    - base_uri: base-URI provider, default ``settings.loader.base_uri`` or the
      working directory
    """

    def __init__(
        self,
        settings: Any = None,
        *,
        transports: Mapping[str, BaseTransport] | None = None,
        resolver: BasePackageResolver | None = None,
        base_uri: BaseUriProvider | None = None,
        **_: Any,
    ) -> None:
        self.settings = settings
        self.transports = transports if transports is not None else TransportFactory.create_all(settings)
        self.resolver = resolver if resolver is not None else PackageResolverFactory.create(settings)

        if base_uri is None:
            configured = getattr(getattr(settings, "loader", None), "base_uri", None)
            base_uri = fixed_base_uri(configured) if configured else current_base_uri
        self.base_uri = base_uri

    async def resolve(self, uri: str, trace: TraceContext | None = None) -> str:
        with stage_timer(trace, "resolve") as stage:
            resolved = await resolve_uri(uri, resolver=self.resolver, base_uri=self.base_uri)
            stage.update(uri=uri, resolved=resolved)
        logger.debug("Resolved %s -> %s", uri, resolved)
        return resolved

    async def _prepare(self, uri: str, trace: TraceContext | None) -> tuple[str, BaseTransport]:
        resolved = await self.resolve(uri, trace)
        with stage_timer(trace, "dispatch") as stage:
            transport = select_transport(self.transports, resolved)
            stage.update(uri=resolved, transport=type(transport).__name__)
        logger.debug("Dispatching %s to %s", resolved, type(transport).__name__)
        return resolved, transport

    async def open_read(self, uri: str, trace: TraceContext | None = None) -> AsyncIterator[bytes]:
        resolved, transport = await self._prepare(uri, trace)
        with stage_timer(trace, "fetch") as stage:
            size = 0
            async with aclosing(transport.open_read(resolved)) as chunks:
                async for chunk in chunks:
                    size += len(chunk)
                    yield chunk
            stage.update(uri=resolved, size=size)

    async def read_as_bytes(self, uri: str, trace: TraceContext | None = None) -> bytes:
        resolved, transport = await self._prepare(uri, trace)
        with stage_timer(trace, "fetch") as stage:
            content = await transport.read_as_bytes(resolved)
            stage.update(uri=resolved, size=len(content))
        return content

    async def read_as_string(
        self,
        uri: str,
        encoding: str | None = None,
        trace: TraceContext | None = None,
    ) -> str:
        resolved, transport = await self._prepare(uri, trace)
        with stage_timer(trace, "fetch") as stage:
            text = await transport.read_as_string(resolved, encoding)
            stage.update(uri=resolved, characters=len(text))
        return text
