"""Observability helpers (logging)."""

from resource_loader.observability.logger import get_logger, set_level

__all__ = ["get_logger", "set_level"]
