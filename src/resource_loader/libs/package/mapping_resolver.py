"""Resolve ``package:`` URIs through an explicit name -> root URI map."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from resource_loader.core.errors import PackageResolutionError
from resource_loader.core.uri import is_relative
from resource_loader.libs.package.base_resolver import BasePackageResolver, parse_package_uri


class MappingPackageResolver(BasePackageResolver):
    """Package map resolver.

    Roots come from the ``packages`` argument, else ``settings.packages.map``.
    Each root is an absolute URI (``file:``, ``http:`` ...) treated as a
    directory.
    """

    def __init__(
        self,
        settings: Any = None,
        *,
        packages: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(settings, **kwargs)

        if packages is None:
            packages = getattr(getattr(settings, "packages", None), "map", None) or {}

        roots: dict[str, str] = {}
        for name, root in packages.items():
            if is_relative(root):
                raise ValueError(f"Package root for '{name}' must be an absolute URI: {root!r}")
            roots[name] = root if root.endswith("/") else root + "/"
        self.packages: Mapping[str, str] = MappingProxyType(roots)

    async def resolve(self, uri: str) -> str:
        reference = parse_package_uri(uri)
        root = self.packages.get(reference.name)
        if root is None:
            raise PackageResolutionError(uri, f"unknown package '{reference.name}'")
        return root + reference.path
