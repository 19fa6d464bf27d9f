"""pg_dump exporter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from backup_service.core.models import DatabaseKind

from .base import Exporter

if TYPE_CHECKING:
    from pathlib import Path

    from backup_service.core.models import PostgresCredentials


class PostgresExporter(Exporter):
    """Dump a PostgreSQL database in custom format (``.dump``).

    Ownership and privilege statements are left out so the dump restores
    cleanly under a different role. The password travels only through
    ``PGPASSWORD`` in the child environment, never on the command line.
    """

    kind = DatabaseKind.POSTGRES
    extension = "dump"

    def __init__(self, creds: PostgresCredentials, pg_dump_path: str = "pg_dump") -> None:
        self.creds = creds
        self.pg_dump_path = pg_dump_path

    @property
    def binary(self) -> str:
        return self.pg_dump_path

    def build_command(self, output_path: Path) -> list[str]:
        return [
            self.pg_dump_path,
            "-Fc",
            "--no-owner",
            "--no-privileges",
            "-h", self.creds.host,
            "-p", str(self.creds.port),
            "-U", self.creds.user,
            "-d", self.creds.database,
            "-f", str(output_path),
        ]

    def build_env(self) -> dict[str, str]:
        env = super().build_env()
        password = self.creds.password.get_secret_value()
        if password:
            env["PGPASSWORD"] = password
        return env

    def secrets(self) -> list[str]:
        password = self.creds.password.get_secret_value()
        return [password] if password else []
