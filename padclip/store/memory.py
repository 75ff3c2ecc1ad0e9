"""In-process entry store. Same contract as the durable backends, nothing survives a restart."""

from __future__ import annotations

import threading

from padclip.errors import DuplicateEntry
from padclip.models import Entry


class MemoryEntryStore:
    def __init__(self) -> None:
        self._entries: dict[str, Entry] = {}
        self._lock = threading.Lock()

    def insert(self, entry: Entry) -> None:
        with self._lock:
            if entry.id in self._entries:
                raise DuplicateEntry(entry.id)
            self._entries[entry.id] = entry

    def lookup(self, entry_id: str) -> Entry | None:
        # Entries are frozen, so handing out the stored object is a safe snapshot.
        with self._lock:
            return self._entries.get(entry_id)

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def check_health(self) -> dict:
        return {"status": "ok", "backend": "memory", "entries": self.count()}
