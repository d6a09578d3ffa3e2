"""Package resolution exports and default resolver registration."""

from resource_loader.libs.package.base_resolver import (
    BasePackageResolver,
    PackageReference,
    parse_package_uri,
)
from resource_loader.libs.package.importlib_resolver import ImportlibPackageResolver
from resource_loader.libs.package.mapping_resolver import MappingPackageResolver
from resource_loader.libs.package.resolver_factory import PackageResolverFactory

if "importlib" not in PackageResolverFactory._PROVIDERS:
    PackageResolverFactory.register_provider("importlib", ImportlibPackageResolver)
if "mapping" not in PackageResolverFactory._PROVIDERS:
    PackageResolverFactory.register_provider("mapping", MappingPackageResolver)

__all__ = [
    "BasePackageResolver",
    "PackageReference",
    "parse_package_uri",
    "ImportlibPackageResolver",
    "MappingPackageResolver",
    "PackageResolverFactory",
]
