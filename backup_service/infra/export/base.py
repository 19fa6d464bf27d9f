"""Exporter base class: run a dump tool into a timestamped artifact file."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path

from backup_service.core.exceptions import ExportError, FilesystemError
from backup_service.core.models import BackupArtifact, DatabaseKind
from backup_service.infra.logging import redact

logger = logging.getLogger(__name__)


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class Exporter(ABC):
    """Turns live database state into one artifact via an external dump utility.

    Subclasses describe the command line; this class owns naming, running the
    process, cleaning up after failures and redacting diagnostics.
    """

    kind: DatabaseKind
    extension: str

    def artifact_path(self, backup_dir: Path, timestamp_ms: int) -> Path:
        """``{backup_dir}/{kind}_backup_{timestamp_ms}.{ext}``."""
        return backup_dir / f"{self.kind.value}_backup_{timestamp_ms}.{self.extension}"

    @property
    @abstractmethod
    def binary(self) -> str:
        """Dump executable name or path."""

    @abstractmethod
    def build_command(self, output_path: Path) -> list[str]:
        """Return argv for the dump process writing to ``output_path``."""

    def build_env(self) -> dict[str, str]:
        """Environment for the dump process. Defaults to the current environment."""
        return dict(os.environ)

    def secrets(self) -> list[str]:
        """Values to mask in captured diagnostics."""
        return []

    @contextmanager
    def credential_args(self) -> Iterator[list[str]]:
        """Extra argv pointing the dump tool at credentials kept off the command line.

        Whatever backs the arguments lives only while the process runs.
        """
        yield []

    async def export(self, backup_dir: Path, timestamp_ms: int | None = None) -> BackupArtifact:
        """Run the dump and return the artifact it produced.

        Args:
            backup_dir: Directory receiving the artifact. Must already exist.
            timestamp_ms: Epoch milliseconds used in the file name. Defaults to now.

        Returns:
            The artifact, only once the process exited 0 and the file exists.

        Raises:
            ExportError: If the dump tool is missing, exits non-zero or writes nothing.
        """
        stamp = timestamp_ms if timestamp_ms is not None else now_millis()
        output_path = self.artifact_path(backup_dir, stamp)
        logger.info(
            "Running %s",
            self.binary,
            extra={"kind": self.kind.value, "output_path": str(output_path)},
        )

        with self.credential_args() as extra_args:
            cmd = [*self.build_command(output_path), *extra_args]
            try:
                proc = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    env=self.build_env(),
                )
            except FileNotFoundError as e:
                logger.error("Dump tool not found", extra={"binary": self.binary})
                raise ExportError(
                    f"{self.binary} not found; install it or set its path in the backup settings",
                    extra={"kind": self.kind.value, "binary": self.binary},
                ) from e

            _, stderr = await proc.communicate()

        if proc.returncode != 0:
            error_msg = redact(stderr.decode(errors="replace").strip(), self.secrets()) or "Unknown error"
            self._discard(output_path)
            logger.error(
                f"Error backing up {self.kind.value}",
                extra={"returncode": proc.returncode, "stderr": error_msg},
            )
            raise ExportError(
                f"{self.binary} failed with code {proc.returncode}: {error_msg}",
                returncode=proc.returncode,
                stderr=error_msg,
                extra={"kind": self.kind.value},
            )

        if not output_path.exists():
            raise ExportError(
                f"{self.binary} exited successfully but wrote no file at {output_path}",
                returncode=proc.returncode,
                extra={"kind": self.kind.value},
            )

        artifact = BackupArtifact(
            path=output_path,
            kind=self.kind,
            created_at=datetime.fromtimestamp(stamp / 1000, tz=UTC),
            size_bytes=output_path.stat().st_size,
        )
        logger.info(
            f"{self.kind.value} backup created at: {output_path}",
            extra={"size_bytes": artifact.size_bytes},
        )
        return artifact

    @staticmethod
    def _discard(path: Path) -> None:
        """Remove a partial artifact left behind by a failed dump."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise FilesystemError(
                f"Could not remove partial backup {path}: {e}",
                extra={"path": str(path)},
            ) from e
