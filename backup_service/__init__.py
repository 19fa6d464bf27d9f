"""Database backup utility for PostgreSQL and MongoDB."""

__version__ = "0.1.0"
