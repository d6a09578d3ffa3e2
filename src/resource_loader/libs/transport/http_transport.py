"""HTTP(S) transport built on ``httpx.AsyncClient``.

A client is opened per call and closed when the call finishes, so the
transport itself keeps no connection state between loads.

Parameter priority (high to low):
1) constructor arguments
2) settings.http.*
3) module defaults
"""

from __future__ import annotations

from typing import Any, AsyncIterator

import httpx

from resource_loader.core.errors import TransportError
from resource_loader.core.settings import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT
from resource_loader.core.uri import scheme_of
from resource_loader.libs.transport.base_transport import BaseTransport, FetchResult
from resource_loader.observability.logger import get_logger

logger = get_logger("resource_loader.transport.http")


class HttpTransport(BaseTransport):
    """GET-only transport for ``http:`` and ``https:`` URIs."""

    SCHEMES = frozenset({"http", "https"})

    def __init__(
        self,
        settings: Any = None,
        *,
        timeout: float | None = None,
        client_transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        """Configure the transport.

        - timeout: per-request timeout in seconds.
        - client_transport: optional httpx transport handed to every client
          (e.g. ``httpx.MockTransport`` in tests).
        """

        super().__init__(settings, **kwargs)

        http_settings = getattr(settings, "http", None)
        configured_timeout = getattr(http_settings, "timeout", DEFAULT_HTTP_TIMEOUT)
        self.timeout = float(timeout if timeout is not None else configured_timeout)
        self.follow_redirects = bool(getattr(http_settings, "follow_redirects", True))
        self.user_agent = str(getattr(http_settings, "user_agent", DEFAULT_USER_AGENT))
        self._client_transport = client_transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
            headers={"User-Agent": self.user_agent},
            transport=self._client_transport,
        )

    @staticmethod
    def _raise_for_status(scheme: str, uri: str, response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as error:
            logger.debug("GET %s answered HTTP %s", uri, response.status_code)
            raise TransportError(
                scheme,
                uri,
                f"HTTP {response.status_code} {response.reason_phrase}".rstrip(),
            ) from error

    def _wrap_request_error(self, scheme: str, uri: str, error: httpx.RequestError) -> TransportError:
        logger.debug("GET %s failed: %s", uri, error)
        if isinstance(error, httpx.TimeoutException):
            return TransportError(scheme, uri, f"Request timed out after {self.timeout:.0f} seconds")
        return TransportError(scheme, uri, f"Request failed: {error}")

    async def open_read(self, uri: str) -> AsyncIterator[bytes]:
        scheme = scheme_of(uri)
        try:
            async with self._client() as client:
                async with client.stream("GET", uri) as response:
                    self._raise_for_status(scheme, uri, response)
                    async for chunk in response.aiter_bytes(self.chunk_size):
                        yield chunk
        except httpx.RequestError as error:
            raise self._wrap_request_error(scheme, uri, error) from error

    async def fetch(self, uri: str) -> FetchResult:
        scheme = scheme_of(uri)
        try:
            async with self._client() as client:
                response = await client.get(uri)
        except httpx.RequestError as error:
            raise self._wrap_request_error(scheme, uri, error) from error

        self._raise_for_status(scheme, uri, response)
        return FetchResult(content=response.content, charset=response.charset_encoding)
