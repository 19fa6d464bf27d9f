"""Backup tasks."""
