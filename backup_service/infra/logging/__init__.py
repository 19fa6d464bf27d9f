"""Logging setup, formatting and secret redaction."""

from __future__ import annotations

from .config import configure_logging, setup_logging
from .filters import SecretRedactingFilter, clear_secrets, redact, register_secret
from .formatters import JSONFormatter

__all__ = [
    "JSONFormatter",
    "SecretRedactingFilter",
    "clear_secrets",
    "configure_logging",
    "redact",
    "register_secret",
    "setup_logging",
]
