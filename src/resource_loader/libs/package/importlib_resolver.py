"""Resolve ``package:`` URIs against installed Python packages."""

from __future__ import annotations

import asyncio
import importlib.resources
from pathlib import Path
from urllib.parse import unquote

from resource_loader.core.errors import PackageResolutionError
from resource_loader.libs.package.base_resolver import (
    BasePackageResolver,
    PackageReference,
    parse_package_uri,
)
from resource_loader.observability.logger import get_logger

logger = get_logger("resource_loader.package.importlib")


class ImportlibPackageResolver(BasePackageResolver):
    """Treats ``<name>`` as an importable package (dotted names allowed).

    ``package:mypkg/data/config.json`` maps to
    ``importlib.resources.files("mypkg") / "data" / "config.json"``. Path
    segments are percent-decoded before lookup, so ``my%20file.txt`` names
    the file ``my file.txt``. Only packages stored on the filesystem can be
    resolved.
    """

    async def resolve(self, uri: str) -> str:
        reference = parse_package_uri(uri)
        # Locating a package may import it.
        return await asyncio.to_thread(self._locate, reference)

    @staticmethod
    def _locate(reference: PackageReference) -> str:
        name = unquote(reference.name)
        try:
            target = importlib.resources.files(name)
        except (ImportError, TypeError, ValueError) as error:
            logger.debug("Package lookup for %s failed: %s", name, error)
            raise PackageResolutionError(reference.uri, f"unknown package '{name}'") from error
        except Exception as error:
            # Importing runs the package's own code, which may fail in any way.
            logger.debug("Importing package %s raised: %r", name, error)
            raise PackageResolutionError(
                reference.uri, f"importing package '{name}' failed: {error}"
            ) from error

        for part in reference.path.split("/"):
            if part:
                target = target / unquote(part)

        if not isinstance(target, Path):
            raise PackageResolutionError(
                reference.uri, f"package '{name}' is not stored on the filesystem"
            )

        resolved = target.absolute().as_uri()
        if reference.path.endswith("/"):
            resolved += "/"
        return resolved
