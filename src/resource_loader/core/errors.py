"""Error types raised by loaders, transports and package resolvers."""

from __future__ import annotations


class ResourceLoaderError(Exception):
    """Base exception for all resource loading failures."""


class UnsupportedSchemeError(ResourceLoaderError):
    """Raised when a URI scheme has no registered transport."""

    def __init__(self, scheme: str, uri: str) -> None:
        label = scheme or "(none)"
        super().__init__(f"Unsupported URI scheme '{label}': {uri}")
        self.scheme = scheme
        self.uri = uri


class InvalidReferenceError(ResourceLoaderError):
    """Raised when a relative reference reaches a loader that cannot resolve it."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"Relative URI reference is not supported by this loader: {uri}")
        self.uri = uri


class PackageResolutionError(ResourceLoaderError):
    """Raised when a package: URI cannot be mapped to a concrete location."""

    def __init__(self, uri: str, reason: str) -> None:
        super().__init__(f"Cannot resolve package URI '{uri}': {reason}")
        self.uri = uri
        self.reason = reason


class TransportError(ResourceLoaderError):
    """Raised when the underlying transport fails.

    The original exception is always chained as ``__cause__``.
    """

    def __init__(self, scheme: str, uri: str, message: str) -> None:
        super().__init__(f"[{scheme}] {message}")
        self.scheme = scheme
        self.uri = uri
