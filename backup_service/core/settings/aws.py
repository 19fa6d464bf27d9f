"""AWS S3 upload settings."""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_yaml_source


class AwsSettings(BaseSettings):
    """Credentials and target bucket for S3 uploads.

    Environment variables use AWS_ prefix, matching the names the AWS
    tooling already reads.
    Example: AWS_ACCESS_KEY_ID="AKIA..."
             AWS_SECRET_ACCESS_KEY="..."
             AWS_REGION="eu-west-1"
             AWS_BUCKET="db-backups"

    Supports S3-compatible services (MinIO, LocalStack) via AWS_ENDPOINT_URL.
    """

    access_key_id: SecretStr | None = Field(
        default=None,
        description="AWS access key ID",
    )
    secret_access_key: SecretStr | None = Field(
        default=None,
        description="AWS secret access key",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region of the bucket",
    )
    bucket: str | None = Field(
        default=None,
        description="S3 bucket receiving the backups",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Custom S3 endpoint URL (for MinIO, LocalStack, etc.)",
    )

    model_config = SettingsConfigDict(
        env_prefix="AWS_",
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
            create_yaml_source(settings_cls, "aws"),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @property
    def is_configured(self) -> bool:
        """Check if bucket and both keys are set."""
        return (
            self.bucket is not None
            and self.access_key_id is not None
            and self.secret_access_key is not None
        )
