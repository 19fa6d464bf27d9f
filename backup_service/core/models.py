"""Domain models for a backup run."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from backup_service.core.exceptions import ConfigError

if TYPE_CHECKING:
    from backup_service.core.settings import (
        AwsSettings,
        BackupSettings,
        MongoSettings,
        PostgresSettings,
    )

MILLIS_PER_DAY = 86_400_000


class DatabaseKind(StrEnum):
    """Databases the service knows how to dump."""

    POSTGRES = "postgres"
    MONGODB = "mongodb"

    @classmethod
    def parse(cls, value: str) -> DatabaseKind:
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(
                f'Unsupported database type "{value}". Please choose "postgres" or "mongodb".',
                extra={"database_kind": value},
            ) from None


class StorageKind(StrEnum):
    """Where an artifact ends up. ``aws`` keeps the local copy and uploads it."""

    LOCAL = "local"
    AWS = "aws"

    @classmethod
    def parse(cls, value: str) -> StorageKind:
        normalized = str(value).strip().lower()
        if normalized in {"cloud", "s3"}:
            return cls.AWS
        try:
            return cls(normalized)
        except ValueError:
            raise ConfigError(
                f'Unsupported storage provider "{value}". Please choose "local" or "aws".',
                extra={"storage_kind": value},
            ) from None


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class CloudCredentials(_Frozen):
    """S3 bucket and the keys that may write to it."""

    access_key: SecretStr
    secret_key: SecretStr
    bucket: str = Field(min_length=1)
    region: str = "us-east-1"
    endpoint_url: str | None = None


class PostgresCredentials(_Frozen):
    host: str = "localhost"
    port: int = Field(default=5432, ge=1, le=65535)
    user: str = "postgres"
    password: SecretStr = SecretStr("")
    database: str = "postgres"
    connect_timeout: int = 10


class MongoCredentials(_Frozen):
    url: SecretStr
    database: str


class RetentionPolicy(_Frozen):
    """Maximum age of a local artifact.

    A file is expired only when its age is strictly greater than the
    threshold; a file exactly ``retention_days`` old is kept.
    """

    retention_days: int = Field(default=7, ge=1)

    @property
    def threshold_ms(self) -> int:
        return self.retention_days * MILLIS_PER_DAY

    def is_expired(self, age_ms: float) -> bool:
        return age_ms > self.threshold_ms


class BackupJobConfig(_Frozen):
    """Everything one run needs. Immutable for the duration of the run.

    ``database_kind`` and ``storage_kind`` hold the configured strings as-is;
    the orchestrator parses them so that a bad value surfaces as
    :class:`ConfigError` before any I/O.
    """

    database_kind: str
    storage_kind: str = StorageKind.LOCAL.value
    retention_days: int = Field(default=7, ge=1)
    backup_dir: Path = Path("backups")
    cloud_credentials: CloudCredentials | None = None
    postgres: PostgresCredentials | None = None
    mongodb: MongoCredentials | None = None
    pg_dump_path: str = "pg_dump"
    mongodump_path: str = "mongodump"
    verify_connection: bool = True

    @property
    def retention(self) -> RetentionPolicy:
        return RetentionPolicy(retention_days=self.retention_days)

    def secrets(self) -> list[str]:
        """Secret values that must never reach logs or error output."""
        values: list[SecretStr] = []
        if self.postgres is not None:
            values.append(self.postgres.password)
        if self.mongodb is not None:
            values.append(self.mongodb.url)
        if self.cloud_credentials is not None:
            values.extend([self.cloud_credentials.access_key, self.cloud_credentials.secret_key])
        return [v.get_secret_value() for v in values if v.get_secret_value()]

    @classmethod
    def from_settings(
        cls,
        backup: BackupSettings,
        aws: AwsSettings | None = None,
        postgres: PostgresSettings | None = None,
        mongodb: MongoSettings | None = None,
        **overrides: object,
    ) -> BackupJobConfig:
        """Assemble a job config from the settings models.

        Args:
            backup: Job settings.
            aws: Upload settings; ignored unless bucket and keys are all set.
            postgres: PostgreSQL credentials.
            mongodb: MongoDB credentials.
            **overrides: Field values that win over settings (CLI options).
        """
        cloud = None
        if aws is not None and aws.is_configured:
            cloud = CloudCredentials(
                access_key=aws.access_key_id,
                secret_key=aws.secret_access_key,
                bucket=aws.bucket,
                region=aws.region,
                endpoint_url=aws.endpoint_url,
            )

        data: dict[str, object] = {
            "database_kind": backup.database,
            "storage_kind": backup.storage,
            "retention_days": backup.retention_days,
            "backup_dir": backup.local_dir,
            "cloud_credentials": cloud,
            "pg_dump_path": backup.pg_dump_path,
            "mongodump_path": backup.mongodump_path,
            "verify_connection": backup.verify_connection,
        }
        if postgres is not None:
            data["postgres"] = PostgresCredentials(
                host=postgres.host,
                port=postgres.port,
                user=postgres.user,
                password=postgres.password,
                database=postgres.database,
                connect_timeout=postgres.connect_timeout,
            )
        if mongodb is not None:
            data["mongodb"] = MongoCredentials(url=mongodb.url, database=mongodb.database)

        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)


class BackupArtifact(_Frozen):
    """A single backup file produced by an exporter."""

    path: Path
    kind: DatabaseKind
    created_at: datetime
    size_bytes: int = 0

    @property
    def filename(self) -> str:
        return self.path.name


class BackupResult(_Frozen):
    """Outcome of a completed run."""

    artifact: BackupArtifact
    storage_kind: StorageKind
    location: str | None = None
    deleted: list[str] = Field(default_factory=list)
