"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the
process. In tests, clear the caches to force a reload:

    clear_all_caches()
"""

from __future__ import annotations

from functools import lru_cache

from .aws import AwsSettings
from .backup import BackupSettings
from .logs import LoggingSettings
from .mongo import MongoSettings
from .postgres import PostgresSettings


@lru_cache(maxsize=1)
def get_backup_settings() -> BackupSettings:
    """Get cached backup job settings."""
    return BackupSettings()


@lru_cache(maxsize=1)
def get_aws_settings() -> AwsSettings:
    """Get cached AWS upload settings."""
    return AwsSettings()


@lru_cache(maxsize=1)
def get_postgres_settings() -> PostgresSettings:
    """Get cached PostgreSQL settings."""
    return PostgresSettings()


@lru_cache(maxsize=1)
def get_mongo_settings() -> MongoSettings:
    """Get cached MongoDB settings."""
    return MongoSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


def clear_all_caches() -> None:
    """Clear all settings caches.

    Useful for testing or when you need to force reload settings.
    """
    get_backup_settings.cache_clear()
    get_aws_settings.cache_clear()
    get_postgres_settings.cache_clear()
    get_mongo_settings.cache_clear()
    get_logging_settings.cache_clear()
