"""Entry store contract shared by every backend."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from padclip.models import Entry


@runtime_checkable
class EntryStore(Protocol):
    """Insert-once keyed storage of clipboard entries.

    ``insert`` raises ``DuplicateEntry`` when the id is taken; the uniqueness
    check and the write happen atomically. ``lookup`` returns the full record
    (key included) or None, and never decodes anything.
    """

    def insert(self, entry: Entry) -> None: ...

    def lookup(self, entry_id: str) -> Entry | None: ...

    def count(self) -> int: ...

    def check_health(self) -> dict: ...
