"""Remote object storage for backup artifacts."""

from __future__ import annotations

from .s3 import KEY_PREFIX, S3Uploader

__all__ = ["KEY_PREFIX", "S3Uploader"]
