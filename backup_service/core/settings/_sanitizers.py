"""Helpers to clean environment variable values before validation."""

from __future__ import annotations

from typing import Any


def drop_trailing_comment(value: str) -> str:
    """Cut a trailing ``  # comment`` off an env value.

    Some env-file loaders keep the comment in ``KEY=7  # one week``. A ``#``
    counts as a comment marker only at the start or after whitespace, so
    values like ``pass#word`` are left untouched.
    """
    for idx, char in enumerate(value):
        if char == "#" and (idx == 0 or value[idx - 1].isspace()):
            return value[:idx].strip()
    return value.strip()


def sanitize_numeric(value: Any) -> Any:
    """Normalize numeric env vars that may carry a trailing comment."""
    if isinstance(value, str):
        cleaned = drop_trailing_comment(value)
        if cleaned:
            return cleaned
    return value
