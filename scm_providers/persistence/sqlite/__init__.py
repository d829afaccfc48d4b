"""SQLite persistence adapters."""

from .config_store import SqliteConfigStore
from .engine import create_connection, init_schema

__all__ = ["SqliteConfigStore", "create_connection", "init_schema"]
