"""Modular Pydantic Settings v2 configuration.

One frozen settings model per concern, each with its own env prefix:
    BACKUP_*    job settings (database, storage, retention, dump binaries)
    AWS_*       S3 upload credentials
    POSTGRES_*  PostgreSQL credentials
    MONGODB_*   MongoDB credentials
    LOG_*       logging

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. YAML/conf.d files (optional)
    3. Environment variables
    4. .env file
    5. secrets_dir
"""

from __future__ import annotations

from .aws import AwsSettings
from .backup import BackupSettings
from .loader import (
    clear_all_caches,
    get_aws_settings,
    get_backup_settings,
    get_logging_settings,
    get_mongo_settings,
    get_postgres_settings,
)
from .logs import LoggingSettings
from .mongo import MongoSettings
from .postgres import PostgresSettings

__all__ = [
    "AwsSettings",
    "BackupSettings",
    "LoggingSettings",
    "MongoSettings",
    "PostgresSettings",
    "clear_all_caches",
    "get_aws_settings",
    "get_backup_settings",
    "get_logging_settings",
    "get_mongo_settings",
    "get_postgres_settings",
]
