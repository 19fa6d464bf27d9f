"""Exception hierarchy for backup runs.

Every failure a run can hit maps onto one of the kinds below, so the CLI
can log it and exit with a non-zero status without inspecting driver or
SDK exception types.
"""

from __future__ import annotations

from typing import Any


class BackupServiceError(Exception):
    """Base backup service exception.

    All custom exceptions should inherit from this class.

    Attributes:
        detail: Human-readable error message.
        type: Error type identifier (kebab-case, stable across releases).
        extra: Additional context-specific information about the error.
        exit_code: Process exit status the CLI uses for this error.

    Example:
            raise BackupServiceError(
            detail="Backup directory is not writable",
            type="filesystem-error",
            extra={"path": "/var/backups"},
        )
    """

    exit_code: int = 1

    def __init__(
        self,
        detail: str,
        type: str = "backup-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize backup service exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            extra: Additional context about the error.
        """
        self.detail = detail
        self.type = type
        self.extra = extra or {}
        super().__init__(detail)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for structured logging."""
        return {"type": self.type, "detail": self.detail, **self.extra}


class ConfigError(BackupServiceError):
    """Raised for unsupported database/storage kinds or missing credentials.

    Example:
            raise ConfigError(
            detail='Unsupported database type "mysql"',
            extra={"database_kind": "mysql"},
        )
    """

    def __init__(self, detail: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail=detail, type="config-error", extra=extra)


class DatabaseConnectionError(BackupServiceError):
    """Raised when the database connection handle cannot be acquired."""

    def __init__(self, detail: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail=detail, type="connection-error", extra=extra)


class ExportError(BackupServiceError):
    """Raised when a dump subprocess fails.

    Attributes:
        returncode: Exit status of the dump process, or None if it never started.
        stderr: Diagnostic output of the dump process with secrets redacted.
    """

    def __init__(
        self,
        detail: str,
        returncode: int | None = None,
        stderr: str = "",
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            detail=detail,
            type="export-error",
            extra={"returncode": returncode, **(extra or {})},
        )


class UploadError(BackupServiceError):
    """Raised on transport or authorization failures during upload."""

    def __init__(self, detail: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail=detail, type="upload-error", extra=extra)


class FilesystemError(BackupServiceError):
    """Raised when a backup directory or file operation fails."""

    def __init__(self, detail: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail=detail, type="filesystem-error", extra=extra)
