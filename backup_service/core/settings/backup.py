"""Backup job settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._sanitizers import sanitize_numeric
from .yaml_sources import create_yaml_source


class BackupSettings(BaseSettings):
    """What to back up, where to keep it and for how long.

    Environment variables use BACKUP_ prefix.
    Example: BACKUP_DATABASE="mongodb"
             BACKUP_STORAGE="aws"
             BACKUP_RETENTION_DAYS=14

    ``database`` and ``storage`` are kept as plain strings; unsupported values
    are rejected by the orchestrator before a run touches the filesystem.
    """

    database: str = Field(
        default="postgres",
        description="Database to back up: postgres or mongodb",
    )
    storage: str = Field(
        default="local",
        description="Where to keep the artifact: local, or aws to also upload to S3",
    )
    retention_days: int = Field(
        default=7,
        ge=1,
        le=3650,
        description="Delete local backups older than N days",
    )
    local_dir: Path = Field(
        default=Path("backups"),
        description="Local directory for backup files (created if absent)",
    )

    # Dump tools
    pg_dump_path: str = Field(
        default="pg_dump",
        description="Path to pg_dump binary",
    )
    mongodump_path: str = Field(
        default="mongodump",
        description="Path to mongodump binary",
    )

    verify_connection: bool = Field(
        default=True,
        description="Open a driver connection to confirm the database is reachable before dumping",
    )

    model_config = SettingsConfigDict(
        env_prefix="BACKUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        """Customize settings source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_yaml_source(settings_cls, "backup"),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @field_validator("retention_days", mode="before")
    @classmethod
    def _normalize_numeric(cls, value: Any) -> Any:
        return sanitize_numeric(value)

    @field_validator("database", "storage", mode="before")
    @classmethod
    def _normalize_kind(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value
