"""Registry-based factory that maps URI schemes to transport classes.

- Registration: tell the library which transport serves which scheme.
- Creation: build one transport instance per registered scheme, sharing a
  single instance between schemes served by the same class.

Loaders look transports up by scheme in the mapping built here, so callers
never branch on ``if scheme == "http"`` themselves.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from resource_loader.core.errors import UnsupportedSchemeError
from resource_loader.libs.transport.base_transport import BaseTransport


class TransportFactory:
    """Registry of transport classes keyed by lower-case scheme."""

    _TRANSPORTS: dict[str, type[BaseTransport]] = {}

    @classmethod
    def register_transport(cls, scheme: str, transport_cls: type[BaseTransport]) -> None:
        """Register ``transport_cls`` for ``scheme``.

        Scheme names are normalized to lower case, so ``HTTP`` and ``http``
        refer to the same entry.
        """

        normalized_name = scheme.strip().lower()
        if not normalized_name:
            raise ValueError("Transport scheme cannot be empty")

        if not isinstance(transport_cls, type) or not issubclass(transport_cls, BaseTransport):
            raise ValueError("Transport class must inherit from BaseTransport")

        cls._TRANSPORTS[normalized_name] = transport_cls

    @classmethod
    def create(cls, scheme: str, settings: Any = None, **kwargs: Any) -> BaseTransport:
        """Instantiate the transport registered for ``scheme``.

        Unknown schemes raise ``UnsupportedSchemeError``.
        """

        normalized_name = scheme.strip().lower()
        transport_cls = cls._TRANSPORTS.get(normalized_name)
        if transport_cls is None:
            raise UnsupportedSchemeError(scheme, f"{scheme}:")

        return transport_cls(settings, **kwargs)

    @classmethod
    def create_all(cls, settings: Any = None, **kwargs: Any) -> Mapping[str, BaseTransport]:
        """Build a read-only ``scheme -> transport`` mapping for every registration."""

        instances: dict[type[BaseTransport], BaseTransport] = {}
        mapping: dict[str, BaseTransport] = {}
        for scheme in cls.list_transports():
            transport_cls = cls._TRANSPORTS[scheme]
            if transport_cls not in instances:
                instances[transport_cls] = transport_cls(settings, **kwargs)
            mapping[scheme] = instances[transport_cls]
        return MappingProxyType(mapping)

    @classmethod
    def list_transports(cls) -> list[str]:
        """Return registered scheme names in alphabetical order."""

        return sorted(cls._TRANSPORTS)
