"""CLI utilities for running async operations and formatting output."""

from backup_service.cli.utils.async_runner import coro
from backup_service.cli.utils.formatters import (
    error,
    format_bytes,
    info,
    section,
    success,
    warning,
)

__all__ = [
    "coro",
    "error",
    "format_bytes",
    "info",
    "section",
    "success",
    "warning",
]
