"""SQLite-backed ``ConfigStore``.

Each ``ConfigGroup`` is stored as one JSON document keyed by group name.
``save_configs`` writes all groups of a call in a single transaction so a
partial update is never visible to ``get_config``.
"""

from __future__ import annotations

import json
import sqlite3
import threading
from typing import Iterable, List, Optional

from ...base.models import ConfigGroup
from .engine import create_connection, init_schema


class SqliteConfigStore:
    """Persist config groups in a ``config_groups`` table."""

    def __init__(self, db_path: Optional[str] = None, *, conn: Optional[sqlite3.Connection] = None) -> None:
        """Open (or adopt) a connection and ensure the schema exists.

        Parameters
        ----------
        db_path:
            Database file path; ``None`` uses a private in-memory database.
        conn:
            Existing connection to adopt instead of opening one.
        """
        self._conn = conn if conn is not None else create_connection(db_path)
        self._lock = threading.Lock()
        init_schema(self._conn)

    def get_config(self, name: str) -> Optional[ConfigGroup]:
        with self._lock:
            row = self._conn.execute(
                "SELECT group_json FROM config_groups WHERE name = ?", (name,)
            ).fetchone()
        if not row:
            return None
        return ConfigGroup.model_validate(json.loads(row[0]))

    def save_configs(self, groups: Iterable[ConfigGroup]) -> None:
        parsed = [ConfigGroup.model_validate(g) for g in groups]
        with self._lock:
            with self._conn:
                for group in parsed:
                    self._conn.execute(
                        "INSERT INTO config_groups(name, group_json, updated_at) VALUES(?, ?, CURRENT_TIMESTAMP) "
                        "ON CONFLICT(name) DO UPDATE SET group_json=excluded.group_json, updated_at=CURRENT_TIMESTAMP",
                        (group.name, json.dumps(group.model_dump(mode="json"), ensure_ascii=False)),
                    )

    def names(self) -> List[str]:
        with self._lock:
            rows = self._conn.execute("SELECT name FROM config_groups ORDER BY name").fetchall()
        return [r[0] for r in rows]

    def close(self) -> None:
        with self._lock:
            self._conn.close()


__all__ = ["SqliteConfigStore"]
