"""PostgreSQL connection settings.

The same credentials feed two consumers: the psycopg connection that checks
reachability, and the pg_dump subprocess that performs the dump.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._sanitizers import sanitize_numeric
from .yaml_sources import create_yaml_source


class PostgresSettings(BaseSettings):
    """PostgreSQL server credentials.

    Environment variables use POSTGRES_ prefix.
    Example: POSTGRES_HOST=db.internal POSTGRES_DATABASE=orders
    """

    host: str = Field(
        default="localhost",
        min_length=1,
        max_length=255,
        description="PostgreSQL server hostname or IP address.",
    )
    port: int = Field(
        default=5432,
        ge=1,
        le=65535,
        description="PostgreSQL server port.",
    )
    user: str = Field(
        default="postgres",
        min_length=1,
        description="Database username.",
    )
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password (passed to pg_dump through PGPASSWORD).",
    )
    database: str = Field(
        default="postgres",
        min_length=1,
        description="Database name.",
    )
    connect_timeout: int = Field(
        default=10,
        ge=1,
        le=300,
        description="Seconds to wait when opening the verification connection.",
    )

    model_config = SettingsConfigDict(
        env_prefix="POSTGRES_",
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
            create_yaml_source(settings_cls, "postgres"),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @field_validator("port", "connect_timeout", mode="before")
    @classmethod
    def _normalize_numeric(cls, value: Any) -> Any:
        return sanitize_numeric(value)
