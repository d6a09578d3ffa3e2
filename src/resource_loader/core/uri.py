"""URI helpers shared by loaders and transports.

URIs travel through the library as plain strings and are parsed on demand
with ``urllib.parse``. Nothing here performs I/O.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable
from urllib.parse import urljoin, urlsplit


class Scheme(str, Enum):
    """URI schemes the loaders know about."""

    FILE = "file"
    HTTP = "http"
    HTTPS = "https"
    DATA = "data"
    PACKAGE = "package"
    NONE = ""


# Schemes that a transport can service without any rewriting.
LOADABLE_SCHEMES: frozenset[str] = frozenset(
    {Scheme.FILE.value, Scheme.HTTP.value, Scheme.HTTPS.value, Scheme.DATA.value}
)

BaseUriProvider = Callable[[], str]


def scheme_of(uri: str) -> str:
    """Return the lower-cased scheme of ``uri`` (empty for relative references)."""

    return urlsplit(uri).scheme.lower()


def is_relative(uri: str) -> bool:
    return scheme_of(uri) == Scheme.NONE.value


def resolve_reference(base: str, reference: str) -> str:
    """Resolve ``reference`` against the absolute ``base`` URI.

    Absolute references come back unchanged. Relative ones follow RFC 3986
    reference resolution (path merge, dot-segment removal, query and
    fragment override).
    """

    if not is_relative(reference):
        return reference
    if is_relative(base):
        raise ValueError(f"Base URI must be absolute: {base!r}")
    return urljoin(base, reference)


def current_base_uri() -> str:
    """Return the working directory as a ``file:`` URI ending with ``/``."""

    uri = Path.cwd().as_uri()
    return uri if uri.endswith("/") else uri + "/"


def fixed_base_uri(uri: str) -> BaseUriProvider:
    """Build a base-URI provider that always answers ``uri``."""

    if is_relative(uri):
        raise ValueError(f"Base URI must be absolute: {uri!r}")

    def _provider() -> str:
        return uri

    return _provider
