"""Tests for core exceptions."""

from backup_service.core import exceptions as exc


def test_base_exception_defaults() -> None:
    error = exc.BackupServiceError(detail="bad")
    assert str(error) == "bad"
    assert error.type == "backup-error"
    assert error.extra == {}
    assert error.exit_code == 1


def test_config_error_fields() -> None:
    error = exc.ConfigError("unsupported", extra={"database_kind": "mysql"})
    assert error.type == "config-error"
    assert error.extra["database_kind"] == "mysql"
    assert isinstance(error, exc.BackupServiceError)


def test_export_error_carries_returncode_and_stderr() -> None:
    error = exc.ExportError("pg_dump failed", returncode=2, stderr="auth failed", extra={"kind": "postgres"})
    assert error.returncode == 2
    assert error.stderr == "auth failed"
    assert error.extra == {"returncode": 2, "kind": "postgres"}


def test_to_dict_flattens_extra() -> None:
    error = exc.UploadError("denied", extra={"bucket": "b"})
    assert error.to_dict() == {"type": "upload-error", "detail": "denied", "bucket": "b"}


def test_every_kind_is_a_backup_service_error() -> None:
    for cls in (
        exc.ConfigError,
        exc.DatabaseConnectionError,
        exc.UploadError,
        exc.FilesystemError,
    ):
        assert issubclass(cls, exc.BackupServiceError)
    assert issubclass(exc.ExportError, exc.BackupServiceError)
