"""Configuration inspection command."""

import json
import sys

import click
from pydantic import ValidationError

from backup_service.cli.utils import error, section
from backup_service.core.settings import (
    get_aws_settings,
    get_backup_settings,
    get_logging_settings,
    get_mongo_settings,
    get_postgres_settings,
)

_MASK = "********"


def _masked(value: object) -> object:
    """Render settings values for display; secrets show only whether they are set."""
    if hasattr(value, "get_secret_value"):
        return _MASK if value.get_secret_value() else ""
    if value is None:
        return None
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


def collect_settings() -> dict[str, dict[str, object]]:
    """Effective settings per section with secrets masked."""
    sections = {
        "backup": get_backup_settings(),
        "aws": get_aws_settings(),
        "postgres": get_postgres_settings(),
        "mongodb": get_mongo_settings(),
        "logging": get_logging_settings(),
    }
    return {
        name: {field: _masked(getattr(settings, field)) for field in type(settings).model_fields}
        for name, settings in sections.items()
    }


@click.command(name="config")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
def config(output_format: str) -> None:
    """Show the effective configuration (secrets masked)."""
    try:
        data = collect_settings()
    except ValidationError as e:
        error(f"Invalid configuration: {e}")
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
        return

    for name, values in data.items():
        section(name.upper())
        for field, value in values.items():
            click.echo(f"  {field:<20} {'' if value is None else value}")
