"""Clipboard data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class Entry(BaseModel):
    """A stored clipboard entry, exactly as persisted.

    ``content`` holds the pad-encoded payload when ``protected`` is set. The
    ``key`` field is present iff the entry is protected; only the service ever
    sees it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    content: str
    protected: bool = False
    key: str | None = None

    @model_validator(mode="after")
    def check_key_iff_protected(self) -> Entry:
        if self.protected != (self.key is not None):
            raise ValueError("key must be set if and only if the entry is protected")
        return self

    @classmethod
    def from_row(cls, row) -> Entry:
        """Build an entry from an ``(id, content, protected, key)`` row."""
        entry_id, content, protected, key = row
        return cls(id=entry_id, content=content, protected=bool(protected), key=key)

    def to_row(self) -> tuple[str, str, int, str | None]:
        return (self.id, self.content, int(self.protected), self.key)


class EntryView(BaseModel):
    """What a plain (unauthenticated) read returns. Never includes the key."""

    model_config = ConfigDict(frozen=True)

    id: str
    content: str | None = None
    protected: bool = False

    @classmethod
    def of(cls, entry: Entry) -> EntryView:
        return cls(
            id=entry.id,
            content=None if entry.protected else entry.content,
            protected=entry.protected,
        )
