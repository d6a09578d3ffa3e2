"""Settings loading and validation.

This module provides a minimal, type-safe configuration loader for the library.

Design principles:
- Fail-fast: invalid fields raise a readable error that includes the field path
- Optional: every section has defaults, so an empty file is a valid config
- No side effects: this module only parses/validates configuration; no network/IO init
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import urlsplit

import yaml

DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "resource-loader/0.1"


class SettingsError(ValueError):
    """Raised when settings are missing or invalid."""


@dataclass(frozen=True)
class LoaderSettings:
    variant: str = "package"
    base_uri: str | None = None
    chunk_size: int = DEFAULT_CHUNK_SIZE


@dataclass(frozen=True)
class HttpSettings:
    timeout: float = DEFAULT_HTTP_TIMEOUT
    follow_redirects: bool = True
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class PackageSettings:
    resolver: str = "importlib"
    map: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class ObservabilitySettings:
    log_level: str = "INFO"


@dataclass(frozen=True)
class Settings:
    loader: LoaderSettings
    http: HttpSettings
    packages: PackageSettings
    observability: ObservabilitySettings


def default_settings() -> Settings:
    """Return settings populated with defaults only."""

    return Settings(
        loader=LoaderSettings(),
        http=HttpSettings(),
        packages=PackageSettings(),
        observability=ObservabilitySettings(),
    )


def _optional_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SettingsError(f"Invalid section type: {key}")
    return value


def _as_str(value: Any, path: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SettingsError(f"Invalid value for {path}: expected non-empty string")
    return value


def _as_positive_int(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise SettingsError(f"Invalid value for {path}: expected positive int")
    return value


def _as_positive_float(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise SettingsError(f"Invalid value for {path}: expected positive float")
    return float(value)


def _as_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise SettingsError(f"Invalid value for {path}: expected bool")
    return value


def _as_absolute_uri(value: Any, path: str) -> str:
    text = _as_str(value, path)
    if not urlsplit(text).scheme:
        raise SettingsError(f"Invalid value for {path}: expected absolute URI")
    return text


def _as_uri_map(value: Any, path: str) -> Mapping[str, str]:
    if not isinstance(value, Mapping):
        raise SettingsError(f"Invalid value for {path}: expected mapping")
    out: dict[str, str] = {}
    for name, root in value.items():
        key = _as_str(name, f"{path} key")
        out[key] = _as_absolute_uri(root, f"{path}.{key}")
    return MappingProxyType(out)


def validate_settings(settings: Settings) -> None:
    """Validate cross-field invariants."""

    if settings.packages.resolver.strip().lower() == "mapping" and not settings.packages.map:
        raise SettingsError("packages.map must not be empty when packages.resolver is 'mapping'")


def parse_settings(raw_obj: Mapping[str, Any]) -> Settings:
    """Build validated settings from an already-parsed mapping."""

    loader_raw = _optional_section(raw_obj, "loader")
    http_raw = _optional_section(raw_obj, "http")
    packages_raw = _optional_section(raw_obj, "packages")
    observability_raw = _optional_section(raw_obj, "observability")

    base_uri_raw = loader_raw.get("base_uri")
    loader = LoaderSettings(
        variant=_as_str(loader_raw.get("variant", "package"), "loader.variant"),
        base_uri=(
            None if base_uri_raw is None else _as_absolute_uri(base_uri_raw, "loader.base_uri")
        ),
        chunk_size=_as_positive_int(
            loader_raw.get("chunk_size", DEFAULT_CHUNK_SIZE),
            "loader.chunk_size",
        ),
    )

    http = HttpSettings(
        timeout=_as_positive_float(http_raw.get("timeout", DEFAULT_HTTP_TIMEOUT), "http.timeout"),
        follow_redirects=_as_bool(
            http_raw.get("follow_redirects", True),
            "http.follow_redirects",
        ),
        user_agent=_as_str(http_raw.get("user_agent", DEFAULT_USER_AGENT), "http.user_agent"),
    )

    packages = PackageSettings(
        resolver=_as_str(packages_raw.get("resolver", "importlib"), "packages.resolver"),
        map=_as_uri_map(packages_raw.get("map") or {}, "packages.map"),
    )

    observability = ObservabilitySettings(
        log_level=_as_str(
            observability_raw.get("log_level", "INFO"),
            "observability.log_level",
        ),
    )

    settings = Settings(
        loader=loader,
        http=http,
        packages=packages,
        observability=observability,
    )

    validate_settings(settings)
    return settings


def load_settings(path: str | Path) -> Settings:
    """Load settings from a YAML file."""

    settings_path = Path(path)
    if not settings_path.exists():
        raise SettingsError(f"Settings file not found: {settings_path}")

    try:
        raw_obj = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file: {settings_path}") from e

    if raw_obj is None:
        return default_settings()
    if not isinstance(raw_obj, Mapping):
        raise SettingsError(f"Invalid settings root: expected mapping in {settings_path}")

    return parse_settings(raw_obj)
