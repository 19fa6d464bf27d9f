"""Database backup tasks.

- Orchestration of connect, export, upload, retention sweep and close
- Local retention sweep and listing
"""

from __future__ import annotations

from .orchestrator import BackupOrchestrator, run_backup
from .retention import list_backups, sweep_expired_backups

__all__ = [
    "BackupOrchestrator",
    "list_backups",
    "run_backup",
    "sweep_expired_backups",
]
