"""
Core Layer - shared contracts.

This package contains:
- Configuration management (settings.py)
- Error types (errors.py)
- URI helpers and base-URI providers (uri.py)
- Default charset policy (charset.py)
- Trace collection
"""

from resource_loader.core.errors import (
    InvalidReferenceError,
    PackageResolutionError,
    ResourceLoaderError,
    TransportError,
    UnsupportedSchemeError,
)
from resource_loader.core.uri import Scheme

__all__ = [
    "ResourceLoaderError",
    "UnsupportedSchemeError",
    "InvalidReferenceError",
    "PackageResolutionError",
    "TransportError",
    "Scheme",
]
