"""Watermark stores for the call watcher.

The watermark is the largest effective timestamp (epoch ms) seen on any
polled page. It survives between polls, so each store keeps exactly one
optional integer.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, MutableMapping, Optional, Union

logger = logging.getLogger(__name__)

WATERMARK_KEY = "lastSeenTimestamp"

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS watermarks (
    key                 TEXT PRIMARY KEY,
    last_seen_timestamp INTEGER NOT NULL,
    updated_at          TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


class WatermarkStore:
    """Read and write the persisted watermark."""

    def read(self) -> Optional[int]:
        raise NotImplementedError

    def write(self, value: int) -> None:
        raise NotImplementedError


class InMemoryWatermarkStore(WatermarkStore):
    """Keeps the watermark on the instance. Lost when the process exits."""

    def __init__(self, value: Optional[int] = None) -> None:
        self.value = value
        self.writes = 0

    def read(self) -> Optional[int]:
        return self.value

    def write(self, value: int) -> None:
        self.value = value
        self.writes += 1


class StaticDataWatermarkStore(WatermarkStore):
    """
    Stores the watermark in a host-owned mapping.

    Workflow hosts hand each trigger a mutable "static data" dict that they
    persist between executions; the watermark lives under ``lastSeenTimestamp``.
    """

    def __init__(self, data: MutableMapping[str, Any], key: str = WATERMARK_KEY) -> None:
        self._data = data
        self._key = key

    def read(self) -> Optional[int]:
        value = self._data.get(self._key)
        if value is None:
            return None
        return int(value)

    def write(self, value: int) -> None:
        self._data[self._key] = value


class SQLiteWatermarkStore(WatermarkStore):
    """
    Watermark persisted in a SQLite file, one row per watcher key.

    A connection is opened per read or write.
    """

    def __init__(self, path: Union[str, Path], key: str = "default") -> None:
        self.path = Path(path)
        self.key = key

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.path), timeout=5)
        conn.executescript(_CREATE_TABLE)
        return conn

    def read(self) -> Optional[int]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT last_seen_timestamp FROM watermarks WHERE key = ?", (self.key,)
            ).fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def write(self, value: int) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """INSERT INTO watermarks (key, last_seen_timestamp, updated_at)
                   VALUES (?, ?, datetime('now'))
                   ON CONFLICT(key) DO UPDATE SET
                     last_seen_timestamp = excluded.last_seen_timestamp,
                     updated_at = excluded.updated_at""",
                (self.key, value),
            )
            conn.commit()
            logger.debug(f"Watermark {self.key} -> {value}")
        finally:
            conn.close()

    def reset(self) -> None:
        """Forget the watermark so the next poll emits the whole page."""
        conn = self._connect()
        try:
            conn.execute("DELETE FROM watermarks WHERE key = ?", (self.key,))
            conn.commit()
        finally:
            conn.close()
