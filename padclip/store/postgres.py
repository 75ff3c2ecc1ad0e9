"""
PostgreSQL entry store.

Insert-once is enforced by the primary key: ``ON CONFLICT (id) DO NOTHING``
returns no row when the id already exists, which becomes ``DuplicateEntry``.
Tables come from ``padclip migrate``.

PostgreSQL ``TEXT`` cannot hold NUL characters. Entries carrying one are
rejected with ``InvalidContent`` before they reach the driver; with the scalar
codec that includes any sealed content where a key character equals the
plaintext character at the same position.
"""

from __future__ import annotations

import logging

from padclip.db.connection import get_connection
from padclip.errors import DuplicateEntry, InvalidContent
from padclip.models import Entry

logger = logging.getLogger(__name__)

_NUL = "\x00"


class PostgresEntryStore:
    def insert(self, entry: Entry) -> None:
        for field in ("id", "content", "key"):
            value = getattr(entry, field)
            if value is not None and _NUL in value:
                raise InvalidContent(f"{field} contains a NUL character, which PostgreSQL cannot store")

        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO entries (id, content, protected, key)
                    VALUES (%s, %s, %s, %s)
                    ON CONFLICT (id) DO NOTHING
                    RETURNING id
                    """,
                    entry.to_row(),
                )
                if cur.fetchone() is None:
                    raise DuplicateEntry(entry.id)

    def lookup(self, entry_id: str) -> Entry | None:
        if _NUL in entry_id:
            return None
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT id, content, protected, key FROM entries WHERE id = %s",
                    (entry_id,),
                )
                row = cur.fetchone()
        return Entry.from_row(row) if row else None

    def count(self) -> int:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT count(*) FROM entries")
                return cur.fetchone()[0]

    def check_health(self) -> dict:
        return {"status": "ok", "backend": "postgres", "entries": self.count()}
