"""Database reachability checks.

A run opens one driver connection before dumping to confirm the server is
reachable with the configured credentials. The dump itself goes through a
separate external process, so the handle is never queried beyond a ping.

Usage:
    ```python
    async with open_connection(DatabaseKind.POSTGRES, config) as handle:
        artifact = await exporter.export(config.backup_dir)
    # handle is closed here, whether the block returned or raised
    ```
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import psycopg
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from backup_service.core.exceptions import ConfigError, DatabaseConnectionError
from backup_service.core.models import DatabaseKind
from backup_service.infra.logging import redact

if TYPE_CHECKING:
    from backup_service.core.models import (
        BackupJobConfig,
        MongoCredentials,
        PostgresCredentials,
    )

logger = logging.getLogger(__name__)

MONGO_SERVER_SELECTION_TIMEOUT_MS = 10_000


async def connect_postgres(creds: PostgresCredentials) -> psycopg.AsyncConnection:
    """Open a psycopg connection and confirm it answers ``SELECT 1``.

    Raises:
        DatabaseConnectionError: If the server is unreachable or rejects the credentials.
    """
    password = creds.password.get_secret_value()
    conn: psycopg.AsyncConnection | None = None
    try:
        conn = await psycopg.AsyncConnection.connect(
            host=creds.host,
            port=creds.port,
            user=creds.user,
            password=password or None,
            dbname=creds.database,
            connect_timeout=creds.connect_timeout,
            autocommit=True,
        )
        async with conn.cursor() as cur:
            await cur.execute("SELECT 1")
    except psycopg.Error as e:
        if conn is not None:
            await conn.close()
        message = redact(str(e), [password])
        logger.error(
            "Failed to connect to PostgreSQL",
            extra={"host": creds.host, "port": creds.port, "error": message},
        )
        raise DatabaseConnectionError(
            f"Could not connect to PostgreSQL at {creds.host}:{creds.port}: {message}",
            extra={"host": creds.host, "port": creds.port, "database": creds.database},
        ) from e

    logger.info("Connected to PostgreSQL", extra={"host": creds.host, "database": creds.database})
    return conn


async def connect_mongodb(creds: MongoCredentials) -> AsyncMongoClient:
    """Create a MongoDB client and confirm the server answers ``ping``.

    The client connects lazily, so the ping is what actually proves reachability.

    Raises:
        DatabaseConnectionError: If no server can be selected or authentication fails.
    """
    url = creds.url.get_secret_value()
    client: AsyncMongoClient | None = None
    try:
        client = AsyncMongoClient(url, serverSelectionTimeoutMS=MONGO_SERVER_SELECTION_TIMEOUT_MS)
        await client.admin.command("ping")
    except PyMongoError as e:
        if client is not None:
            await client.close()
        message = redact(str(e), [url])
        logger.error("Failed to connect to MongoDB", extra={"error": message})
        raise DatabaseConnectionError(
            f"Could not connect to MongoDB: {message}",
            extra={"database": creds.database},
        ) from e

    logger.info("Connected to MongoDB", extra={"database": creds.database})
    return client


async def close_connection(handle: Any) -> None:
    """Close a handle returned by one of the connect functions.

    Close failures are logged and not raised, so they never mask the error
    that ended the run.
    """
    try:
        await handle.close()
    except (psycopg.Error, PyMongoError, OSError) as e:
        logger.warning("Failed to close database connection", extra={"error": str(e)})
    else:
        logger.debug("Database connection closed")


@asynccontextmanager
async def open_connection(
    kind: DatabaseKind, config: BackupJobConfig
) -> AsyncIterator[Any]:
    """Acquire the connection handle for ``kind`` and release it on every exit path.

    Yields None without connecting when ``config.verify_connection`` is off.

    Raises:
        ConfigError: If credentials for ``kind`` are missing from the config.
        DatabaseConnectionError: If the connection cannot be established.
    """
    if not config.verify_connection:
        yield None
        return

    if kind is DatabaseKind.POSTGRES:
        if config.postgres is None:
            raise ConfigError("PostgreSQL credentials are not configured")
        handle = await connect_postgres(config.postgres)
    else:
        if config.mongodb is None:
            raise ConfigError("MongoDB credentials are not configured")
        handle = await connect_mongodb(config.mongodb)

    try:
        yield handle
    finally:
        await close_connection(handle)
