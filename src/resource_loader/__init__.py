"""resource-loader - load the content behind a URI without caring how it travels.

Supports ``file:``, ``http:``, ``https:`` and ``data:`` URIs directly, plus
relative references and ``package:`` URIs through the resolving loader:

    from resource_loader import DEFAULT_LOADER

    text = await DEFAULT_LOADER.read_as_string("package:mypkg/templates/index.html")
"""

from resource_loader.core.errors import (
    InvalidReferenceError,
    PackageResolutionError,
    ResourceLoaderError,
    TransportError,
    UnsupportedSchemeError,
)
from resource_loader.core.settings import Settings, SettingsError, default_settings, load_settings
from resource_loader.core.trace import TraceContext
from resource_loader.core.uri import Scheme, current_base_uri, fixed_base_uri
from resource_loader.libs.loader import (
    DEFAULT_LOADER,
    DefaultLoader,
    LoaderFactory,
    PackageLoader,
    ResourceLoader,
    resolve_uri,
)
from resource_loader.libs.package import (
    BasePackageResolver,
    ImportlibPackageResolver,
    MappingPackageResolver,
    PackageResolverFactory,
)
from resource_loader.libs.transport import (
    BaseTransport,
    DataTransport,
    FileTransport,
    HttpTransport,
    TransportFactory,
)

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "ResourceLoaderError",
    "UnsupportedSchemeError",
    "InvalidReferenceError",
    "PackageResolutionError",
    "TransportError",
    # Settings
    "Settings",
    "SettingsError",
    "default_settings",
    "load_settings",
    # URIs and tracing
    "Scheme",
    "current_base_uri",
    "fixed_base_uri",
    "TraceContext",
    # Loaders
    "ResourceLoader",
    "DefaultLoader",
    "PackageLoader",
    "LoaderFactory",
    "DEFAULT_LOADER",
    "resolve_uri",
    # Package resolution
    "BasePackageResolver",
    "ImportlibPackageResolver",
    "MappingPackageResolver",
    "PackageResolverFactory",
    # Transports
    "BaseTransport",
    "FileTransport",
    "HttpTransport",
    "DataTransport",
    "TransportFactory",
]
