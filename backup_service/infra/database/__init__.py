"""Database connection handling."""

from __future__ import annotations

from .connectors import close_connection, connect_mongodb, connect_postgres, open_connection

__all__ = [
    "close_connection",
    "connect_mongodb",
    "connect_postgres",
    "open_connection",
]
