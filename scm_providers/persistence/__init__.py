"""Configuration persistence for SCM providers.

Exposes the ``ConfigStore`` protocol and its in-memory and SQLite
implementations.
"""

from .interfaces import ConfigStore
from .memory import InMemoryConfigStore
from .sqlite import SqliteConfigStore

__all__ = ["ConfigStore", "InMemoryConfigStore", "SqliteConfigStore"]
