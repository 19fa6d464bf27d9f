"""mongodump exporter."""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from backup_service.core.exceptions import FilesystemError
from backup_service.core.models import DatabaseKind

from .base import Exporter

if TYPE_CHECKING:
    from backup_service.core.models import MongoCredentials

logger = logging.getLogger(__name__)


class MongoExporter(Exporter):
    """Dump a MongoDB database as a gzipped archive (``.gz``).

    The connection URI may carry a password, so it is handed to mongodump
    through a ``--config`` YAML file readable only by the current user and
    removed as soon as the process exits. Only the file path shows up in argv.
    """

    kind = DatabaseKind.MONGODB
    extension = "gz"

    def __init__(self, creds: MongoCredentials, mongodump_path: str = "mongodump") -> None:
        self.creds = creds
        self.mongodump_path = mongodump_path

    @property
    def binary(self) -> str:
        return self.mongodump_path

    @property
    def uri(self) -> str:
        """Connection URI with the database as its path."""
        base, sep, query = self.creds.url.get_secret_value().partition("?")
        uri = f"{base.rstrip('/')}/{self.creds.database}"
        return f"{uri}{sep}{query}"

    def build_command(self, output_path: Path) -> list[str]:
        return [
            self.mongodump_path,
            "--gzip",
            f"--archive={output_path}",
        ]

    @contextmanager
    def credential_args(self) -> Iterator[list[str]]:
        try:
            # mkstemp-backed, so the file is created with mode 0600
            with tempfile.NamedTemporaryFile(
                "w", prefix="mongodump-", suffix=".yaml", delete=False, encoding="utf-8"
            ) as fh:
                config_path = Path(fh.name)
                yaml.safe_dump({"uri": self.uri}, fh)
        except OSError as e:
            raise FilesystemError(f"Could not write mongodump config file: {e}") from e

        try:
            yield [f"--config={config_path}"]
        finally:
            try:
                config_path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(
                    "Failed to remove mongodump config file",
                    extra={"path": str(config_path), "error": str(e)},
                )

    def secrets(self) -> list[str]:
        return [self.creds.url.get_secret_value(), self.uri]
