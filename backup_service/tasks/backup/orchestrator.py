"""Backup orchestration.

A run is a straight line:

    START -> CONNECT -> EXPORT -> (UPLOAD if storage=aws) -> SWEEP_RETENTION
          -> CLOSE_CONNECTION -> DONE

Kinds and credentials are validated before any I/O. A failure at any step
ends the run and propagates to the caller; nothing is retried. The
connection is acquired through a scoped connector, so it is closed on every
exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any

from backup_service.core.exceptions import FilesystemError
from backup_service.core.models import BackupResult, DatabaseKind, StorageKind
from backup_service.infra.database import open_connection
from backup_service.infra.export import get_exporter
from backup_service.infra.storage import S3Uploader
from backup_service.tasks.backup.retention import sweep_expired_backups

if TYPE_CHECKING:
    from backup_service.core.models import BackupJobConfig
    from backup_service.infra.export import Exporter

logger = logging.getLogger(__name__)

Connector = Callable[[DatabaseKind, "BackupJobConfig"], AbstractAsyncContextManager[Any]]


class BackupOrchestrator:
    """Runs one backup job.

    Exporters, uploader and connector are injectable so tests can replace the
    dump tools, S3 and the database drivers.

    Example:
            orchestrator = BackupOrchestrator(config)
        result = await orchestrator.backup()
        print(result.artifact.path, result.location, result.deleted)
    """

    def __init__(
        self,
        config: BackupJobConfig,
        exporters: Mapping[DatabaseKind, Exporter] | None = None,
        uploader: S3Uploader | None = None,
        connector: Connector = open_connection,
    ) -> None:
        self.config = config
        self._exporters = dict(exporters or {})
        self._uploader = uploader
        self._connector = connector

    def _exporter_for(self, kind: DatabaseKind) -> Exporter:
        if kind in self._exporters:
            return self._exporters[kind]
        return get_exporter(kind, self.config)

    def _uploader_for(self, storage: StorageKind) -> S3Uploader | None:
        if storage is not StorageKind.AWS:
            return None
        if self._uploader is None:
            self._uploader = S3Uploader(self.config.cloud_credentials)
        return self._uploader

    def _ensure_backup_dir(self) -> None:
        try:
            self.config.backup_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"Could not create backup directory {self.config.backup_dir}: {e}",
                extra={"path": str(self.config.backup_dir)},
            ) from e

    async def backup(self) -> BackupResult:
        """Run the job.

        Returns:
            The artifact, its upload location (aws storage only) and the
            names of local backups removed by the retention sweep.

        Raises:
            ConfigError: Unsupported database/storage kind or missing credentials.
            DatabaseConnectionError: The database could not be reached.
            ExportError: The dump tool failed.
            UploadError: The S3 transfer failed.
            FilesystemError: The backup directory could not be prepared or swept.
        """
        # Everything that can be rejected without I/O is rejected here
        kind = DatabaseKind.parse(self.config.database_kind)
        storage = StorageKind.parse(self.config.storage_kind)
        exporter = self._exporter_for(kind)
        uploader = self._uploader_for(storage)

        backup_dir = self.config.backup_dir
        logger.info(
            "Starting database backup",
            extra={
                "database": kind.value,
                "storage": storage.value,
                "backup_dir": str(backup_dir),
                "retention_days": self.config.retention_days,
            },
        )

        self._ensure_backup_dir()

        async with self._connector(kind, self.config):
            artifact = await exporter.export(backup_dir)

            logger.info(f"Selected storage provider: {storage.value}")

            location = None
            if uploader is not None:
                location = await uploader.upload(
                    artifact.path,
                    metadata={"backup_kind": kind.value},
                )

            deleted = sweep_expired_backups(backup_dir, self.config.retention)

        result = BackupResult(
            artifact=artifact,
            storage_kind=storage,
            location=location,
            deleted=deleted,
        )
        logger.info(
            "Database backup completed successfully",
            extra={
                "artifact": str(artifact.path),
                "size_bytes": artifact.size_bytes,
                "location": location,
                "old_backups_deleted": len(deleted),
            },
        )
        return result


async def run_backup(config: BackupJobConfig, **kwargs: Any) -> BackupResult:
    """Build an orchestrator for ``config`` and run it once."""
    return await BackupOrchestrator(config, **kwargs).backup()
