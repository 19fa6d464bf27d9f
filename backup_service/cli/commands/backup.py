"""Backup commands.

Example:bash
    # Back up the configured database (BACKUP_DATABASE, POSTGRES_*/MONGODB_*)
    backup-service run

    # Back up MongoDB and upload to S3, keeping two weeks locally
    backup-service run --database mongodb --storage aws --retention-days 14

    # Apply the retention window without taking a new backup
    backup-service sweep

    # Show local backups
    backup-service list --format json
"""

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from backup_service.cli.utils import coro, error, format_bytes, info, section, success, warning
from backup_service.core.exceptions import BackupServiceError
from backup_service.core.models import BackupJobConfig, RetentionPolicy
from backup_service.core.settings import (
    get_aws_settings,
    get_backup_settings,
    get_mongo_settings,
    get_postgres_settings,
)
from backup_service.infra.logging import register_secret
from backup_service.tasks.backup import list_backups, run_backup, sweep_expired_backups

logger = logging.getLogger(__name__)


def load_job_config(**overrides) -> BackupJobConfig:
    """Build the job config from settings plus CLI overrides.

    Secrets found in the config are registered with the log redaction filter.
    """
    config = BackupJobConfig.from_settings(
        get_backup_settings(),
        aws=get_aws_settings(),
        postgres=get_postgres_settings(),
        mongodb=get_mongo_settings(),
        **overrides,
    )
    register_secret(*config.secrets())
    return config


def _fail(message: str, exc: Exception, exit_code: int = 1) -> None:
    error(f"{message}: {exc}")
    sys.exit(exit_code)


@click.command(name="run")
@click.option("--database", "database_kind", help="Database to back up (postgres or mongodb).")
@click.option("--storage", "storage_kind", help="local, or aws to also upload to S3.")
@click.option(
    "--retention-days",
    type=click.IntRange(min=1),
    help="Delete local backups older than N days.",
)
@click.option(
    "--backup-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Local directory for backup files.",
)
@coro
async def run(
    database_kind: str | None,
    storage_kind: str | None,
    retention_days: int | None,
    backup_dir: Path | None,
) -> None:
    """Dump the database, optionally upload it, then apply retention."""
    try:
        config = load_job_config(
            database_kind=database_kind,
            storage_kind=storage_kind,
            retention_days=retention_days,
            backup_dir=backup_dir,
        )
    except ValidationError as e:
        logger.error("Invalid backup configuration", extra={"error": str(e)})
        _fail("Invalid backup configuration", e)

    info(f"Backing up {config.database_kind} to {config.backup_dir}")

    try:
        result = await run_backup(config)
    except BackupServiceError as e:
        logger.error("Error during backup process", extra=e.to_dict())
        _fail("Backup failed", e, e.exit_code)
    except Exception as e:
        logger.exception("Unexpected error during backup process")
        _fail("Backup failed", e)

    success("Backup process completed successfully.")
    click.echo(f"  Artifact:  {result.artifact.path} ({format_bytes(result.artifact.size_bytes)})")
    if result.location:
        click.echo(f"  Uploaded:  {result.location}")
    click.echo(f"  Removed:   {len(result.deleted)} old backup(s)")


@click.command(name="sweep")
@click.option("--retention-days", type=click.IntRange(min=1), help="Override retention window.")
@click.option(
    "--backup-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Local directory for backup files.",
)
def sweep(retention_days: int | None, backup_dir: Path | None) -> None:
    """Delete local backups older than the retention window."""
    try:
        settings = get_backup_settings()
        policy = RetentionPolicy(retention_days=retention_days or settings.retention_days)
        directory = backup_dir or settings.local_dir
        deleted = sweep_expired_backups(directory, policy)
    except (BackupServiceError, ValidationError) as e:
        logger.error("Retention sweep failed", extra={"error": str(e)})
        _fail("Retention sweep failed", e)

    if not deleted:
        info(f"No backups older than {policy.retention_days} day(s) in {directory}")
        return
    for name in deleted:
        click.echo(f"  deleted {name}")
    success(f"Removed {len(deleted)} old backup(s)")


@click.command(name="list")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option(
    "--backup-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Local directory for backup files.",
)
def list_cmd(output_format: str, backup_dir: Path | None) -> None:
    """List local backups, newest first."""
    directory = backup_dir or get_backup_settings().local_dir

    try:
        backups = list_backups(directory)
    except OSError as e:
        _fail(f"Could not read {directory}", e)

    if output_format == "json":
        click.echo(json.dumps(backups, indent=2))
        return

    if not backups:
        warning(f"No backups found in {directory}")
        return

    section(f"Backups in {directory}")
    for backup in backups:
        click.echo(
            f"  {backup['filename']:<45} {format_bytes(backup['size_bytes']):>10}  {backup['modified']}"
        )
    click.echo(f"\n  Total: {len(backups)}")
