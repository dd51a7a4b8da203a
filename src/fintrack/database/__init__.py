"""Storage layer for fintrack application."""

from fintrack.database.base import Storage
from fintrack.database.factories import create_sqlite_storage

__all__ = ["Storage", "create_sqlite_storage"]
