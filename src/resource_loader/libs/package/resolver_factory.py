"""Package resolver factory.

Responsibilities:
1) keep the resolver registry (name -> class);
2) build the resolver named by ``settings.packages.resolver``;
3) report configuration mistakes with the list of available names.
"""

from __future__ import annotations

from typing import Any

from resource_loader.libs.package.base_resolver import BasePackageResolver

DEFAULT_RESOLVER = "importlib"


class PackageResolverFactory:
    """Registry-based package resolver factory."""

    _PROVIDERS: dict[str, type[BasePackageResolver]] = {}

    @classmethod
    def register_provider(
        cls,
        provider_name: str,
        provider_class: type[BasePackageResolver],
    ) -> None:
        normalized_name = provider_name.strip().lower()
        if not normalized_name:
            raise ValueError("Provider name cannot be empty")

        if not isinstance(provider_class, type) or not issubclass(provider_class, BasePackageResolver):
            raise ValueError("Provider class must inherit from BasePackageResolver")

        cls._PROVIDERS[normalized_name] = provider_class

    @classmethod
    def create(cls, settings: Any = None, **overrides: Any) -> BasePackageResolver:
        """Create the resolver configured in ``settings.packages.resolver``.

        Falls back to the importlib resolver when nothing is configured.
        """

        package_settings = getattr(settings, "packages", None)
        resolver_raw = getattr(package_settings, "resolver", None) or DEFAULT_RESOLVER
        if not isinstance(resolver_raw, str) or not resolver_raw.strip():
            raise ValueError("Invalid configuration: settings.packages.resolver")

        resolver_name = resolver_raw.strip().lower()
        resolver_class = cls._PROVIDERS.get(resolver_name)
        if resolver_class is None:
            available_providers = cls.list_providers()
            available_text = ", ".join(available_providers) if available_providers else "none"
            raise ValueError(
                f"Unsupported package resolver: '{resolver_raw}'. "
                f"Available providers: {available_text}"
            )

        resolver_constructor: Any = resolver_class
        return resolver_constructor(settings, **overrides)

    @classmethod
    def list_providers(cls) -> list[str]:
        return sorted(cls._PROVIDERS.keys())
