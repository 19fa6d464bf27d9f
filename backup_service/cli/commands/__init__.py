"""CLI command modules."""

from backup_service.cli.commands import backup, config

__all__ = ["backup", "config"]
