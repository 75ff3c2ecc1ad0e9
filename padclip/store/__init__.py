"""Entry storage backends."""

from __future__ import annotations

from padclip.config import Config, get_config
from padclip.store.base import EntryStore
from padclip.store.memory import MemoryEntryStore
from padclip.store.sqlite import SqliteEntryStore


def get_store(config: Config | None = None) -> EntryStore:
    """Build the store selected by ``PADCLIP_STORE``."""
    cfg = config or get_config()
    if cfg.store == "memory":
        return MemoryEntryStore()
    if cfg.store == "postgres":
        from padclip.store.postgres import PostgresEntryStore

        return PostgresEntryStore()
    return SqliteEntryStore(cfg.sqlite_path)


__all__ = ["EntryStore", "MemoryEntryStore", "SqliteEntryStore", "get_store"]
