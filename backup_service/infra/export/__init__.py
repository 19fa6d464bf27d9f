"""Database exporters.

Each exporter wraps one native dump tool:
- PostgresExporter: pg_dump, custom format, ``.dump``
- MongoExporter: mongodump, gzipped archive, ``.gz``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from backup_service.core.exceptions import ConfigError
from backup_service.core.models import DatabaseKind

from .base import Exporter, now_millis
from .mongo import MongoExporter
from .postgres import PostgresExporter

if TYPE_CHECKING:
    from backup_service.core.models import BackupJobConfig


def get_exporter(kind: DatabaseKind, config: BackupJobConfig) -> Exporter:
    """Build the exporter for ``kind`` from the job config.

    Raises:
        ConfigError: If credentials for ``kind`` are missing.
    """
    if kind is DatabaseKind.POSTGRES:
        if config.postgres is None:
            raise ConfigError("PostgreSQL credentials are not configured")
        return PostgresExporter(config.postgres, pg_dump_path=config.pg_dump_path)

    if config.mongodb is None:
        raise ConfigError("MongoDB credentials are not configured")
    return MongoExporter(config.mongodb, mongodump_path=config.mongodump_path)


__all__ = [
    "Exporter",
    "MongoExporter",
    "PostgresExporter",
    "get_exporter",
    "now_millis",
]
