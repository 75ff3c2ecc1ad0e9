"""
SQLite entry store.

Same table shape as the PostgreSQL backend. One connection per store, shared
across threads behind a lock; other processes using the same file are handled
by SQLite's own locking with a 2 s busy timeout.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path

from padclip.errors import DuplicateEntry
from padclip.models import Entry

logger = logging.getLogger(__name__)

BUSY_TIMEOUT = 2.0

SCHEMA = """
CREATE TABLE IF NOT EXISTS entries (
    id        TEXT PRIMARY KEY NOT NULL,
    content   TEXT NOT NULL,
    protected INT NOT NULL,
    key       TEXT
)
"""


class SqliteEntryStore:
    def __init__(self, path: Path | str) -> None:
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.path, timeout=BUSY_TIMEOUT, check_same_thread=False)
        self.ensure_schema()

    def ensure_schema(self) -> None:
        with self._lock, self._conn:
            self._conn.execute(SCHEMA)
        logger.debug("SQLite schema ready at %s", self.path)

    def insert(self, entry: Entry) -> None:
        with self._lock:
            try:
                with self._conn:
                    self._conn.execute(
                        "INSERT INTO entries (id, content, protected, key) VALUES (?, ?, ?, ?)",
                        entry.to_row(),
                    )
            except sqlite3.IntegrityError as e:
                raise DuplicateEntry(entry.id) from e

    def lookup(self, entry_id: str) -> Entry | None:
        with self._lock:
            row = self._conn.execute(
                "SELECT id, content, protected, key FROM entries WHERE id = ?",
                (entry_id,),
            ).fetchone()
        return Entry.from_row(row) if row else None

    def count(self) -> int:
        with self._lock:
            return self._conn.execute("SELECT count(*) FROM entries").fetchone()[0]

    def check_health(self) -> dict:
        return {"status": "ok", "backend": "sqlite", "entries": self.count()}

    def close(self) -> None:
        with self._lock:
            self._conn.close()
