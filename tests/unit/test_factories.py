"""Unit tests for the transport and loader factories."""

from __future__ import annotations

from types import MappingProxyType, SimpleNamespace
from typing import Any, AsyncIterator

import pytest

from resource_loader.core.errors import UnsupportedSchemeError
from resource_loader.libs.loader import (
    DEFAULT_LOADER,
    DefaultLoader,
    LoaderFactory,
    PackageLoader,
    ResourceLoader,
)
from resource_loader.libs.transport import (
    BaseTransport,
    DataTransport,
    FetchResult,
    FileTransport,
    HttpTransport,
    TransportFactory,
)


class EchoTransport(BaseTransport):
    SCHEMES = frozenset({"echo"})

    def __init__(self, settings: Any = None, **kwargs: Any) -> None:
        super().__init__(settings)
        self.kwargs = kwargs

    async def open_read(self, uri: str) -> AsyncIterator[bytes]:
        yield uri.encode("utf-8")

    async def fetch(self, uri: str) -> FetchResult:
        return FetchResult(content=uri.encode("utf-8"))


# -----------------------------------------------------------------------------
# TransportFactory
# -----------------------------------------------------------------------------


class TestTransportFactory:
    @pytest.fixture(autouse=True)
    def isolated_registry(self, monkeypatch) -> None:
        monkeypatch.setattr(TransportFactory, "_TRANSPORTS", dict(TransportFactory._TRANSPORTS))

    def test_default_transports_registered(self) -> None:
        assert TransportFactory.list_transports() == ["data", "file", "http", "https"]

    def test_create(self) -> None:
        assert isinstance(TransportFactory.create("file"), FileTransport)
        assert isinstance(TransportFactory.create("HTTPS"), HttpTransport)
        assert isinstance(TransportFactory.create("data"), DataTransport)

    def test_create_unknown_scheme(self) -> None:
        with pytest.raises(UnsupportedSchemeError) as exc_info:
            TransportFactory.create("gopher")
        assert exc_info.value.scheme == "gopher"

    def test_create_passes_settings_and_kwargs(self) -> None:
        TransportFactory.register_transport("echo", EchoTransport)
        settings = SimpleNamespace(loader=SimpleNamespace(chunk_size=7))

        transport = TransportFactory.create("echo", settings, flavour="x")

        assert isinstance(transport, EchoTransport)
        assert transport.settings is settings
        assert transport.chunk_size == 7
        assert transport.kwargs == {"flavour": "x"}

    def test_create_all_shares_instances_per_class(self) -> None:
        transports = TransportFactory.create_all()

        assert isinstance(transports, MappingProxyType)
        assert transports["http"] is transports["https"]
        assert transports["file"] is not transports["data"]

    def test_create_all_is_read_only(self) -> None:
        transports = TransportFactory.create_all()
        with pytest.raises(TypeError):
            transports["ftp"] = FileTransport()  # type: ignore[index]

    def test_register_case_insensitive(self) -> None:
        TransportFactory.register_transport("ECHO", EchoTransport)
        assert "echo" in TransportFactory.list_transports()

    def test_register_invalid_class(self) -> None:
        class NotATransport:
            pass

        with pytest.raises(ValueError, match="must inherit from BaseTransport"):
            TransportFactory.register_transport("bad", NotATransport)  # type: ignore[arg-type]

    def test_register_empty_scheme(self) -> None:
        with pytest.raises(ValueError, match="cannot be empty"):
            TransportFactory.register_transport(" ", EchoTransport)

    def test_registered_scheme_reaches_loaders(self) -> None:
        TransportFactory.register_transport("echo", EchoTransport)
        loader = DefaultLoader()
        assert isinstance(loader.transports["echo"], EchoTransport)


# -----------------------------------------------------------------------------
# LoaderFactory
# -----------------------------------------------------------------------------


class TestLoaderFactory:
    @pytest.fixture(autouse=True)
    def isolated_registry(self, monkeypatch) -> None:
        monkeypatch.setattr(LoaderFactory, "_PROVIDERS", dict(LoaderFactory._PROVIDERS))

    def test_variants_registered(self) -> None:
        assert LoaderFactory.list_providers() == ["default", "package"]

    def test_create_defaults_to_package_loader(self) -> None:
        assert isinstance(LoaderFactory.create(), PackageLoader)

    def test_create_default_variant(self) -> None:
        settings = SimpleNamespace(loader=SimpleNamespace(variant="Default"))
        assert isinstance(LoaderFactory.create(settings), DefaultLoader)

    def test_create_forwards_collaborators(self) -> None:
        transports = {"echo": EchoTransport()}
        loader = LoaderFactory.create(None, transports=transports)
        assert isinstance(loader, PackageLoader)
        assert loader.transports is transports

    def test_unknown_variant(self) -> None:
        settings = SimpleNamespace(loader=SimpleNamespace(variant="caching"))
        with pytest.raises(ValueError) as exc_info:
            LoaderFactory.create(settings)

        error_message = str(exc_info.value)
        assert "Unsupported loader variant 'caching'" in error_message
        assert "Available variants: default, package" in error_message

    def test_register_invalid_class(self) -> None:
        with pytest.raises(ValueError, match="must inherit from ResourceLoader"):
            LoaderFactory.register_provider("bad", dict)  # type: ignore[arg-type]

    def test_shared_default_loader(self) -> None:
        assert isinstance(DEFAULT_LOADER, ResourceLoader)
        assert isinstance(DEFAULT_LOADER, PackageLoader)
