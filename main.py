"""CLI entry: print the resource behind a URI.

Examples:
    python main.py data:,hello
    python main.py package:resource_loader/__init__.py
    python main.py https://example.com --bytes > page.html
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import replace
from pathlib import Path

from resource_loader import (
    LoaderFactory,
    ResourceLoaderError,
    Settings,
    SettingsError,
    default_settings,
    load_settings,
)
from resource_loader.observability.logger import get_logger, set_level


async def _load(uri: str, settings: Settings, *, as_bytes: bool, encoding: str | None) -> None:
    loader = LoaderFactory.create(settings)
    if as_bytes:
        async for chunk in loader.open_read(uri):
            sys.stdout.buffer.write(chunk)
        sys.stdout.buffer.flush()
        return

    text = await loader.read_as_string(uri, encoding=encoding)
    sys.stdout.write(text)
    sys.stdout.flush()


def main() -> None:
    parser = argparse.ArgumentParser(description="Load a resource by URI and print it")
    parser.add_argument("uri", help="file:, http(s):, data:, package: URI or relative reference")
    parser.add_argument("--bytes", action="store_true", help="Write raw bytes instead of text")
    parser.add_argument("--encoding", default=None, help="Explicit text encoding")
    parser.add_argument(
        "--variant",
        choices=LoaderFactory.list_providers(),
        default=None,
        help="Loader variant (overrides settings)",
    )
    parser.add_argument("--settings", default="config/settings.yaml", help="Settings file path")
    args = parser.parse_args()

    logger = get_logger("resource_loader.cli")

    try:
        if Path(args.settings).exists():
            settings = load_settings(args.settings)
        else:
            settings = default_settings()
    except SettingsError as e:
        logger.error(str(e))
        raise SystemExit(1) from e

    set_level(settings.observability.log_level)
    if args.variant is not None:
        settings = replace(settings, loader=replace(settings.loader, variant=args.variant))

    try:
        asyncio.run(_load(args.uri, settings, as_bytes=args.bytes, encoding=args.encoding))
    except (ResourceLoaderError, ValueError) as e:
        logger.error(str(e))
        raise SystemExit(1) from e


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(130)
