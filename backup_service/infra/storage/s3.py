"""S3 uploads for backup artifacts.

Provides a single-request upload of a local artifact to an S3-compatible
bucket (AWS S3, MinIO, LocalStack, etc.).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from backup_service.core.exceptions import ConfigError, FilesystemError, UploadError

if TYPE_CHECKING:
    from backup_service.core.models import CloudCredentials

logger = logging.getLogger(__name__)

KEY_PREFIX = "backups"


class S3Uploader:
    """Uploads artifacts to ``{bucket}/backups/{filename}``.

    The aioboto3 session is owned by the instance (or passed in); credentials
    go to the client call, never to process-wide SDK configuration.

    Example:
            uploader = S3Uploader(config.cloud_credentials)
        location = await uploader.upload(Path("backups/postgres_backup_1735689600123.dump"))
        # https://my-bucket.s3.us-east-1.amazonaws.com/backups/postgres_backup_1735689600123.dump
    """

    def __init__(
        self,
        credentials: CloudCredentials | None,
        session: aioboto3.Session | None = None,
    ) -> None:
        """Initialize uploader.

        Args:
            credentials: Bucket, region and keys.
            session: Optional aioboto3 session; a fresh one is created if omitted.

        Raises:
            ConfigError: If credentials are missing.
        """
        if credentials is None:
            raise ConfigError(
                "AWS storage selected but credentials are not configured. Set AWS_BUCKET, "
                "AWS_ACCESS_KEY_ID, and AWS_SECRET_ACCESS_KEY."
            )
        self.credentials = credentials
        self._session = session or aioboto3.Session()

    def _get_client_config(self) -> dict:
        config = {
            "aws_access_key_id": self.credentials.access_key.get_secret_value(),
            "aws_secret_access_key": self.credentials.secret_key.get_secret_value(),
            "region_name": self.credentials.region,
        }
        if self.credentials.endpoint_url:
            config["endpoint_url"] = self.credentials.endpoint_url
        return config

    @staticmethod
    def object_key(path: Path) -> str:
        return f"{KEY_PREFIX}/{path.name}"

    def location(self, key: str) -> str:
        """Public URL of an uploaded object."""
        bucket = self.credentials.bucket
        if self.credentials.endpoint_url:
            return f"{self.credentials.endpoint_url.rstrip('/')}/{bucket}/{key}"
        return f"https://{bucket}.s3.{self.credentials.region}.amazonaws.com/{key}"

    async def upload(self, local_path: Path, metadata: dict[str, str] | None = None) -> str:
        """Upload a file to S3 in a single request.

        The whole file is read into memory first, which suits dumps of modest size.

        Args:
            local_path: Artifact to upload.
            metadata: Optional object metadata.

        Returns:
            Location URL of the uploaded object.

        Raises:
            FilesystemError: If the local file cannot be read.
            UploadError: If the transfer or authorization fails.
        """
        try:
            body = local_path.read_bytes()
        except OSError as e:
            raise FilesystemError(
                f"Could not read backup file {local_path}: {e}",
                extra={"path": str(local_path)},
            ) from e

        key = self.object_key(local_path)
        content_type = "application/gzip" if local_path.suffix == ".gz" else "application/octet-stream"

        params: dict = {
            "Bucket": self.credentials.bucket,
            "Key": key,
            "Body": body,
            "ContentType": content_type,
        }
        if metadata:
            params["Metadata"] = metadata

        try:
            async with self._session.client("s3", **self._get_client_config()) as s3:
                await s3.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error uploading to S3: {e}", extra={"key": key})
            raise UploadError(
                f"Failed to upload {local_path.name} to s3://{self.credentials.bucket}/{key}: {e}",
                extra={"bucket": self.credentials.bucket, "key": key},
            ) from e

        location = self.location(key)
        logger.info(
            f"Backup uploaded to S3: {location}",
            extra={"bucket": self.credentials.bucket, "key": key, "size_bytes": len(body)},
        )
        return location
