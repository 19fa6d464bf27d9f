"""Local backup retention.

Deletes files in the backup directory whose age exceeds the retention
window. Only the local directory is swept; uploaded copies are untouched.
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from backup_service.core.exceptions import FilesystemError

if TYPE_CHECKING:
    from pathlib import Path

    from backup_service.core.models import RetentionPolicy

logger = logging.getLogger(__name__)


def sweep_expired_backups(
    backup_dir: Path,
    policy: RetentionPolicy,
    now_ms: float | None = None,
) -> list[str]:
    """Remove files older than the retention window.

    Every regular file in ``backup_dir`` is considered, whatever its name.
    A file is deleted iff ``now - mtime`` is strictly greater than the
    policy threshold. Deletion is immediate and irreversible.

    Args:
        backup_dir: Directory containing backup files.
        policy: Retention window.
        now_ms: Reference time in epoch milliseconds. Defaults to now.

    Returns:
        Names of the deleted files.

    Raises:
        FilesystemError: If the directory cannot be listed or a file cannot be removed.
    """
    if not backup_dir.exists():
        return []

    if now_ms is None:
        now_ms = time.time() * 1000

    deleted: list[str] = []
    try:
        entries = sorted(backup_dir.iterdir())
    except OSError as e:
        raise FilesystemError(
            f"Could not list backup directory {backup_dir}: {e}",
            extra={"path": str(backup_dir)},
        ) from e

    for entry in entries:
        try:
            if not entry.is_file():
                logger.debug("Skipping non-file entry", extra={"path": str(entry)})
                continue

            age_ms = now_ms - entry.stat().st_mtime * 1000
            if policy.is_expired(age_ms):
                entry.unlink()
                deleted.append(entry.name)
                logger.info(f"Deleted old backup: {entry.name}", extra={"age_ms": int(age_ms)})
        except FileNotFoundError:
            # Removed between listing and stat/unlink
            continue
        except OSError as e:
            raise FilesystemError(
                f"Could not remove old backup {entry}: {e}",
                extra={"path": str(entry)},
            ) from e

    logger.info(
        "Local backup cleanup completed",
        extra={
            "backup_dir": str(backup_dir),
            "retention_days": policy.retention_days,
            "deleted_count": len(deleted),
        },
    )
    return deleted


def list_backups(backup_dir: Path) -> list[dict]:
    """List files in the backup directory, newest first.

    Returns:
        Dictionaries with filename, path, size_bytes and modified (ISO 8601, UTC).
    """
    if not backup_dir.exists():
        return []

    backups = []
    for entry in backup_dir.iterdir():
        if not entry.is_file():
            continue
        stat = entry.stat()
        backups.append(
            {
                "filename": entry.name,
                "path": str(entry),
                "size_bytes": stat.st_size,
                "modified": datetime.fromtimestamp(stat.st_mtime, tz=UTC).isoformat(),
                "_mtime": stat.st_mtime,
            }
        )

    backups.sort(key=lambda b: b["_mtime"], reverse=True)
    for backup in backups:
        del backup["_mtime"]
    return backups
