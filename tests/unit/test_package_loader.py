"""Unit tests for the resolving PackageLoader and ``resolve_uri``."""

from __future__ import annotations

import asyncio
from pathlib import Path
from types import SimpleNamespace
from typing import Any, AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest

from resource_loader.core.errors import (
    PackageResolutionError,
    TransportError,
    UnsupportedSchemeError,
)
from resource_loader.core.trace import TraceContext
from resource_loader.core.uri import current_base_uri, fixed_base_uri
from resource_loader.libs.loader import PackageLoader, resolve_uri
from resource_loader.libs.package import (
    BasePackageResolver,
    ImportlibPackageResolver,
    MappingPackageResolver,
)
from resource_loader.libs.transport import BaseTransport, FetchResult


async def _collect(stream) -> list[bytes]:
    return [chunk async for chunk in stream]


class RecordingTransport(BaseTransport):
    SCHEMES = frozenset({"file", "http", "https", "data"})

    def __init__(self, content: bytes = b"resolved content", **kwargs: Any) -> None:
        super().__init__(None, **kwargs)
        self.content = content
        self.calls: list[tuple[str, str]] = []

    async def open_read(self, uri: str) -> AsyncIterator[bytes]:
        self.calls.append(("open_read", uri))
        yield self.content

    async def fetch(self, uri: str) -> FetchResult:
        self.calls.append(("fetch", uri))
        return FetchResult(content=self.content)


class StaticResolver(BasePackageResolver):
    """Answers every package: URI with a fixed target and counts calls."""

    def __init__(self, target: str) -> None:
        super().__init__()
        self.target = target
        self.requests: list[str] = []

    async def resolve(self, uri: str) -> str:
        self.requests.append(uri)
        return self.target


class FailingResolver(BasePackageResolver):
    async def resolve(self, uri: str) -> str:
        raise PackageResolutionError(uri, "unknown package 'ghost'")


def make_loader(
    transport: RecordingTransport,
    *,
    base: str = "file:///a/b/",
    resolver: BasePackageResolver | None = None,
) -> PackageLoader:
    return PackageLoader(
        transports={scheme: transport for scheme in RecordingTransport.SCHEMES},
        resolver=resolver,
        base_uri=fixed_base_uri(base),
    )


# -----------------------------------------------------------------------------
# Relative references
# -----------------------------------------------------------------------------


class TestRelativeResolution:
    def test_file_base(self) -> None:
        transport = RecordingTransport()
        loader = make_loader(transport, base="file:///a/b/")

        asyncio.run(loader.read_as_bytes("c.txt"))

        assert transport.calls == [("fetch", "file:///a/b/c.txt")]

    def test_http_base_parent_segment(self) -> None:
        transport = RecordingTransport()
        loader = make_loader(transport, base="http://host/x/")

        asyncio.run(loader.read_as_string("../y"))

        assert transport.calls == [("fetch", "http://host/y")]

    def test_query_and_fragment_override(self) -> None:
        transport = RecordingTransport()
        loader = make_loader(transport, base="https://host/dir/page?old=1#top")

        asyncio.run(_collect(loader.open_read("other?new=2#end")))

        assert transport.calls == [("open_read", "https://host/dir/other?new=2#end")]

    def test_absolute_uri_is_not_rewritten(self) -> None:
        transport = RecordingTransport()
        loader = make_loader(transport, base="http://host/x/")

        asyncio.run(loader.read_as_bytes("file:///etc/motd"))

        assert transport.calls == [("fetch", "file:///etc/motd")]

    def test_base_from_settings(self) -> None:
        transport = RecordingTransport()
        settings = SimpleNamespace(loader=SimpleNamespace(base_uri="http://cfg.test/root/"))
        loader = PackageLoader(
            settings,
            transports={scheme: transport for scheme in RecordingTransport.SCHEMES},
        )

        asyncio.run(loader.read_as_bytes("file.txt"))

        assert transport.calls == [("fetch", "http://cfg.test/root/file.txt")]

    def test_default_base_is_working_directory(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "local.txt").write_text("from cwd", encoding="utf-8")
        loader = PackageLoader()

        assert asyncio.run(loader.read_as_string("local.txt")) == "from cwd"


# -----------------------------------------------------------------------------
# package: URIs
# -----------------------------------------------------------------------------


class TestPackageResolution:
    def test_resolver_result_used_verbatim(self) -> None:
        transport = RecordingTransport()
        resolver = StaticResolver("https://cdn.test/pkgs/foo/lib/data.json?v=3")
        loader = make_loader(transport, resolver=resolver)

        asyncio.run(loader.read_as_bytes("package:foo/lib/data.json"))

        assert resolver.requests == ["package:foo/lib/data.json"]
        assert transport.calls == [("fetch", "https://cdn.test/pkgs/foo/lib/data.json?v=3")]

    def test_resolver_failure_propagates(self) -> None:
        transport = RecordingTransport()
        loader = make_loader(transport, resolver=FailingResolver())

        with pytest.raises(PackageResolutionError, match="ghost"):
            asyncio.run(loader.read_as_string("package:ghost/x.txt"))
        assert transport.calls == []

    @pytest.mark.parametrize("target", ["package:other/x.txt", "relative/x.txt"])
    def test_double_indirection_fails_fast(self, target: str) -> None:
        transport = RecordingTransport()
        resolver = StaticResolver(target)
        loader = make_loader(transport, resolver=resolver)

        with pytest.raises(PackageResolutionError, match="non-loadable"):
            asyncio.run(loader.read_as_bytes("package:foo/x.txt"))

        assert resolver.requests == ["package:foo/x.txt"]
        assert transport.calls == []

    def test_unsupported_resolved_scheme(self) -> None:
        transport = RecordingTransport()
        loader = make_loader(transport, resolver=StaticResolver("ftp://mirror.test/x.txt"))

        with pytest.raises(UnsupportedSchemeError, match="ftp"):
            asyncio.run(loader.read_as_bytes("package:foo/x.txt"))
        assert transport.calls == []

    def test_mapping_resolver_end_to_end(self, tmp_path: Path) -> None:
        (tmp_path / "greeting.txt").write_text("hello from a package", encoding="utf-8")
        resolver = MappingPackageResolver(packages={"assets": tmp_path.as_uri()})
        loader = PackageLoader(resolver=resolver)

        text = asyncio.run(loader.read_as_string("package:assets/greeting.txt"))

        assert text == "hello from a package"

    def test_default_resolver_is_importlib(self) -> None:
        assert isinstance(PackageLoader().resolver, ImportlibPackageResolver)

    def test_mapping_resolver_from_settings(self) -> None:
        settings = SimpleNamespace(
            packages=SimpleNamespace(resolver="mapping", map={"web": "https://cdn.test/web"}),
        )
        loader = PackageLoader(settings)
        assert isinstance(loader.resolver, MappingPackageResolver)
        assert asyncio.run(loader.resolve("package:web/app.js")) == "https://cdn.test/web/app.js"


# -----------------------------------------------------------------------------
# resolve_uri helper and tracing
# -----------------------------------------------------------------------------


class TestResolveUriHelper:
    def test_relative_against_default_base(self) -> None:
        resolved = asyncio.run(resolve_uri("x/y.txt"))
        assert resolved == current_base_uri() + "x/y.txt"

    def test_absolute_unchanged(self) -> None:
        assert asyncio.run(resolve_uri("data:,abc")) == "data:,abc"

    def test_package_with_explicit_resolver(self) -> None:
        resolver = StaticResolver("file:///opt/pkg/x.txt")
        assert asyncio.run(resolve_uri("package:pkg/x.txt", resolver=resolver)) == "file:///opt/pkg/x.txt"

    def test_base_provider_consulted_per_call(self) -> None:
        provider = MagicMock(return_value="https://example.test/root/")
        assert asyncio.run(resolve_uri("a.txt", base_uri=provider)) == "https://example.test/root/a.txt"
        assert asyncio.run(resolve_uri("../b.txt", base_uri=provider)) == "https://example.test/b.txt"
        assert provider.call_count == 2

    def test_package_uri_skips_base_provider(self) -> None:
        provider = MagicMock(return_value="file:///unused/")
        resolver = AsyncMock(spec=BasePackageResolver)
        resolver.resolve.return_value = "file:///opt/pkg/x.txt"

        resolved = asyncio.run(resolve_uri("package:pkg/x.txt", resolver=resolver, base_uri=provider))

        assert resolved == "file:///opt/pkg/x.txt"
        resolver.resolve.assert_awaited_once_with("package:pkg/x.txt")
        provider.assert_not_called()


class TestTracing:
    def test_records_resolve_and_dispatch(self, tmp_path: Path) -> None:
        transport = RecordingTransport()
        loader = make_loader(transport, base="file:///a/b/")
        trace = TraceContext(log_file=str(tmp_path / "logs" / "traces.jsonl"))

        asyncio.run(loader.read_as_bytes("c.txt", trace=trace))

        assert trace.get_stage_data("resolve") == {"uri": "c.txt", "resolved": "file:///a/b/c.txt"}
        assert trace.get_stage_data("dispatch") == {
            "uri": "file:///a/b/c.txt",
            "transport": "RecordingTransport",
        }

        assert trace.get_stage_data("fetch") == {"uri": "file:///a/b/c.txt", "size": len(b"resolved content")}
        for stage_name in ("resolve", "dispatch", "fetch"):
            assert trace.get_stage_elapsed_ms(stage_name) >= 0.0

        payload = trace.finish()
        assert payload["trace_id"] == trace.trace_id
        assert set(payload["stages"]) == {"resolve", "dispatch", "fetch"}
        assert payload["stages"]["fetch"]["data"]["size"] == len(b"resolved content")
        assert (tmp_path / "logs" / "traces.jsonl").read_text(encoding="utf-8").count("\n") == 1

    def test_stream_records_fetch_after_exhaustion(self) -> None:
        transport = RecordingTransport(content=b"12345")
        loader = make_loader(transport)
        trace = TraceContext()

        chunks = asyncio.run(_collect(loader.open_read("c.txt", trace=trace)))

        assert chunks == [b"12345"]
        assert trace.get_stage_data("fetch") == {"uri": "file:///a/b/c.txt", "size": 5}

    def test_failed_resolution_records_nothing(self) -> None:
        loader = make_loader(RecordingTransport(), resolver=FailingResolver())
        trace = TraceContext()

        with pytest.raises(PackageResolutionError):
            asyncio.run(loader.read_as_bytes("package:ghost/x.txt", trace=trace))

        assert trace.stages == {}


# -----------------------------------------------------------------------------
# Concurrency
# -----------------------------------------------------------------------------


class TestConcurrency:
    def test_concurrent_loads_do_not_block_each_other(self) -> None:
        async def scenario() -> list[bytes]:
            second_started = asyncio.Event()

            class GatedTransport(BaseTransport):
                SCHEMES = frozenset({"data"})

                async def open_read(self, uri: str) -> AsyncIterator[bytes]:
                    yield b""

                async def fetch(self, uri: str) -> FetchResult:
                    # The first load can only finish once the second has started.
                    if uri.endswith("first"):
                        await second_started.wait()
                    else:
                        second_started.set()
                    return FetchResult(content=uri.encode("ascii"))

            loader = PackageLoader(
                transports={"data": GatedTransport()},
                base_uri=fixed_base_uri("file:///"),
            )
            return await asyncio.wait_for(
                asyncio.gather(
                    loader.read_as_bytes("data:,first"),
                    loader.read_as_bytes("data:,second"),
                ),
                timeout=5,
            )

        assert asyncio.run(scenario()) == [b"data:,first", b"data:,second"]

    def test_transport_error_surfaces_unchanged(self, tmp_path: Path) -> None:
        loader = PackageLoader(base_uri=fixed_base_uri(tmp_path.as_uri() + "/"))
        with pytest.raises(TransportError) as exc_info:
            asyncio.run(loader.read_as_bytes("missing.txt"))
        assert exc_info.value.uri == (tmp_path / "missing.txt").as_uri()
