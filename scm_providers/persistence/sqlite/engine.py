"""SQLite engine helpers for the configuration store.

Purpose
-------
Open SQLite connections with centralized PRAGMA settings and ensure the
schema exists.

External dependencies
---------------------
Standard library only (``sqlite3``). No side effects at import time.

Reliability strategy
--------------------
- ``busy_timeout`` from ``scm_providers.config.defaults`` mitigates lock
  contention; WAL journaling with NORMAL synchronous mode for file databases.
- No fallback or caching at this layer.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from ...config.defaults import (
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_JOURNAL_MODE,
    SQLITE_SYNCHRONOUS,
)

MEMORY_DB = ":memory:"


def create_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Open a SQLite connection and apply PRAGMA settings.

    Parameters
    ----------
    db_path:
        Path to the database file. ``None`` or ``":memory:"`` opens a private
        in-memory database. ``~`` is expanded and parent directories are
        created for file paths.

    Returns
    -------
    sqlite3.Connection
        An open connection with ``row_factory`` set to ``sqlite3.Row``.
    """
    if not db_path or db_path == MEMORY_DB:
        conn = sqlite3.connect(MEMORY_DB, check_same_thread=False)
    else:
        path = Path(db_path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path), check_same_thread=False)
        conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
        conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")  # ms
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the ``config_groups`` table if missing, then commit.

    Schema
    ------
    - ``config_groups``: group name → JSON document of the whole group
    """
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS config_groups (
            name TEXT PRIMARY KEY,
            group_json TEXT NOT NULL,
            updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        """
    )
    conn.commit()


__all__ = ["MEMORY_DB", "create_connection", "init_schema"]
