"""Transport for ``data:`` URIs (RFC 2397).

Format: ``data:[<mediatype>][;base64],<data>``. The payload is
percent-decoded and, when flagged, base64-decoded.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import AsyncIterator
from urllib.parse import unquote, unquote_to_bytes

from resource_loader.core.errors import TransportError, UnsupportedSchemeError
from resource_loader.core.uri import scheme_of
from resource_loader.libs.transport.base_transport import BaseTransport, FetchResult

DEFAULT_MEDIA_TYPE = "text/plain"


@dataclass(frozen=True)
class DataPayload:
    media_type: str
    charset: str | None
    content: bytes


def parse_data_uri(uri: str) -> DataPayload:
    """Decode a ``data:`` URI into its media type, charset and bytes."""

    scheme = scheme_of(uri)
    if scheme != "data":
        raise UnsupportedSchemeError(scheme, uri)

    body = uri.split(":", 1)[1].split("#", 1)[0]
    header, separator, payload = body.partition(",")
    if not separator:
        raise TransportError("data", uri, "Malformed data URI: missing ',' separator")

    params = header.split(";")
    media_type = params[0].strip().lower() or DEFAULT_MEDIA_TYPE
    charset: str | None = None
    is_base64 = False
    for param in params[1:]:
        param = param.strip()
        if param.lower() == "base64":
            is_base64 = True
            continue
        name, _, value = param.partition("=")
        if name.strip().lower() == "charset" and value.strip():
            charset = unquote(value.strip())

    content = unquote_to_bytes(payload)
    if is_base64:
        try:
            content = base64.b64decode(b"".join(content.split()), validate=True)
        except (binascii.Error, ValueError) as error:
            raise TransportError("data", uri, f"Invalid base64 payload: {error}") from error

    return DataPayload(media_type=media_type, charset=charset, content=content)


class DataTransport(BaseTransport):
    """Decodes the payload embedded in the URI itself."""

    SCHEMES = frozenset({"data"})

    async def open_read(self, uri: str) -> AsyncIterator[bytes]:
        payload = parse_data_uri(uri)
        if payload.content:
            yield payload.content

    async def fetch(self, uri: str) -> FetchResult:
        payload = parse_data_uri(uri)
        return FetchResult(content=payload.content, charset=payload.charset)
