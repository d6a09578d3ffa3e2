"""Loader factory.

Picks the loader variant named by ``settings.loader.variant``:
- ``package``: resolves relative and ``package:`` URIs (default)
- ``default``: absolute ``file``/``http``/``https``/``data`` URIs only
"""

from __future__ import annotations

from typing import Any

from resource_loader.libs.loader.base_loader import ResourceLoader

DEFAULT_VARIANT = "package"


class LoaderFactory:
    """Registry-based loader factory."""

    _PROVIDERS: dict[str, type[ResourceLoader]] = {}

    @classmethod
    def register_provider(cls, name: str, provider_cls: type[ResourceLoader]) -> None:
        normalized_name = name.strip().lower()
        if not normalized_name:
            raise ValueError("Provider name cannot be empty")

        if not isinstance(provider_cls, type) or not issubclass(provider_cls, ResourceLoader):
            raise ValueError("Provider class must inherit from ResourceLoader")

        cls._PROVIDERS[normalized_name] = provider_cls

    @classmethod
    def create(cls, settings: Any = None, **kwargs: Any) -> ResourceLoader:
        """Create the loader configured in ``settings.loader.variant``.

        Extra keyword arguments (``transports``, ``resolver``, ``base_uri``)
        are passed to the loader constructor.
        """

        variant_raw = getattr(getattr(settings, "loader", None), "variant", None) or DEFAULT_VARIANT
        if not isinstance(variant_raw, str) or not variant_raw.strip():
            raise ValueError("Invalid configuration: settings.loader.variant")

        normalized_name = variant_raw.strip().lower()
        provider_cls = cls._PROVIDERS.get(normalized_name)
        if provider_cls is None:
            available = ", ".join(cls.list_providers()) or "(none)"
            raise ValueError(
                f"Unsupported loader variant '{variant_raw}'. "
                f"Available variants: {available}"
            )

        provider_constructor: Any = provider_cls
        return provider_constructor(settings, **kwargs)

    @classmethod
    def list_providers(cls) -> list[str]:
        return sorted(cls._PROVIDERS)
