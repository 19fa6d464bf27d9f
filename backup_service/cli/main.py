"""Main CLI entry point for backup-service."""

import click

from backup_service import __version__
from backup_service.cli.commands import backup, config
from backup_service.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="backup-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Backup Service CLI - dump PostgreSQL or MongoDB, upload to S3, prune old backups.

    Configuration comes from environment variables (or a .env file):
    BACKUP_*, AWS_*, POSTGRES_*, MONGODB_*, LOG_*.

    \b
    Commands:
      run     Take a backup, upload it if storage is aws, apply retention
      sweep   Apply retention to the local backup directory only
      list    List local backups
      config  Show effective configuration

    \b
    Quick Start:
      backup-service config                     # Check what will be used
      backup-service run                        # Back up with configured settings
      backup-service run --database mongodb --storage aws
    """
    ctx.ensure_object(dict)


cli.add_command(backup.run)
cli.add_command(backup.sweep)
cli.add_command(backup.list_cmd)
cli.add_command(config.config)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
