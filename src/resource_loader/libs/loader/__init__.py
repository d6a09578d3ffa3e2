"""Loader exports, variant registration and the shared default loader.

``DEFAULT_LOADER`` is a ``PackageLoader`` built from default settings. It
holds no mutable state, so sharing it across tasks is safe.
"""

from resource_loader.libs.loader.base_loader import ResourceLoader, select_transport
from resource_loader.libs.loader.default_loader import DefaultLoader
from resource_loader.libs.loader.loader_factory import LoaderFactory
from resource_loader.libs.loader.package_loader import PackageLoader, resolve_uri

if "package" not in LoaderFactory._PROVIDERS:
    LoaderFactory.register_provider("package", PackageLoader)
if "default" not in LoaderFactory._PROVIDERS:
    LoaderFactory.register_provider("default", DefaultLoader)

DEFAULT_LOADER: ResourceLoader = PackageLoader()

__all__ = [
    "ResourceLoader",
    "select_transport",
    "DefaultLoader",
    "PackageLoader",
    "resolve_uri",
    "LoaderFactory",
    "DEFAULT_LOADER",
]
