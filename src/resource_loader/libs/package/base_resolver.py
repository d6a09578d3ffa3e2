"""Package-identifier resolution contract.

A ``package:`` URI names a resource relative to a logical package:
``package:<name>/<path>``. How ``<name>`` maps to a concrete location is up
to the host environment, so resolvers are pluggable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote, urlsplit

from resource_loader.core.errors import PackageResolutionError


@dataclass(frozen=True)
class PackageReference:
    """A validated ``package:`` URI split into package name and inner path."""

    uri: str
    name: str
    path: str


def parse_package_uri(uri: str) -> PackageReference:
    """Validate ``uri`` and split it into package name and path.

    Rules:
    1. the scheme is ``package`` and there is no authority
    2. the path does not start with ``/`` and contains ``<name>/<path>``
    3. neither name nor path is empty, and no segment decodes to ``..`` or
       contains an encoded separator
    """

    parsed = urlsplit(uri)
    if parsed.scheme.lower() != "package":
        raise PackageResolutionError(uri, "not a package: URI")
    if parsed.netloc:
        raise PackageResolutionError(uri, "package URIs must not have an authority")

    path = parsed.path
    if not path or path.startswith("/"):
        raise PackageResolutionError(uri, "expected 'package:<name>/<path>'")

    name, separator, inner = path.partition("/")
    if not name or not separator or not inner:
        raise PackageResolutionError(uri, "expected 'package:<name>/<path>'")
    if unquote(name) in {".", ".."}:
        raise PackageResolutionError(uri, "'..' segments are not allowed")
    for segment in inner.split("/"):
        decoded = unquote(segment)
        if decoded == "..":
            raise PackageResolutionError(uri, "'..' segments are not allowed")
        if "/" in decoded or "\\" in decoded:
            raise PackageResolutionError(uri, "path separators inside a segment are not allowed")

    return PackageReference(uri=uri, name=name, path=inner)


class BasePackageResolver(ABC):
    """Maps ``package:`` URIs to absolute, directly loadable URIs."""

    def __init__(self, settings: Any = None, **_: Any) -> None:
        self.settings = settings

    @abstractmethod
    async def resolve(self, uri: str) -> str:
        """Return the absolute URI that ``uri`` denotes.

        Raises ``PackageResolutionError`` when the identifier is malformed
        or unknown.
        """
