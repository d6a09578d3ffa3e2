"""Default charset selection for text loads.

Used only when the caller passes no explicit encoding:

- ``file``: UTF-8
- ``http`` / ``https``: declared Content-Type charset if recognized, else Latin-1
- ``data``: declared media-type charset if recognized, else US-ASCII
"""

from __future__ import annotations

import codecs

from resource_loader.core.uri import Scheme

UTF_8 = "utf-8"
LATIN_1 = "iso8859-1"
ASCII = "ascii"

_FALLBACKS: dict[str, str] = {
    Scheme.FILE.value: UTF_8,
    Scheme.HTTP.value: LATIN_1,
    Scheme.HTTPS.value: LATIN_1,
    Scheme.DATA.value: ASCII,
}


def lookup_encoding(name: str | None) -> str | None:
    """Return the canonical codec name for ``name``, or None if unknown."""

    if not name or not name.strip():
        return None
    try:
        return codecs.lookup(name.strip().strip('"').strip("'")).name
    except LookupError:
        return None


def require_encoding(name: str) -> str:
    """Canonicalize a caller-supplied encoding; unknown names raise ValueError."""

    canonical = lookup_encoding(name)
    if canonical is None:
        raise ValueError(f"Unknown encoding: {name!r}")
    return canonical


def select_charset(scheme: str, declared: str | None = None) -> str:
    """Pick the charset for a resource of ``scheme``.

    ``declared`` is the charset advertised by the resource metadata. Files
    carry no metadata so their declared value is ignored.
    """

    normalized = scheme.lower()
    fallback = _FALLBACKS.get(normalized)
    if fallback is None:
        raise ValueError(f"No default charset for scheme '{scheme}'")

    if normalized == Scheme.FILE.value:
        return fallback

    return lookup_encoding(declared) or fallback
