"""
Clipboard service — the three operations every transport calls.

    write(id, content, key=None)  → store, pad-encoding first when a key is given
    read_plain(id)                → EntryView without key or protected content
    reveal(id, key)               → plaintext, only after the key verifies

All failures are ``padclip.errors.ClipboardError`` subclasses raised to the
caller. Keys and plaintext are never logged.
"""

from __future__ import annotations

import logging
import threading

from padclip.audit.logger import log_event
from padclip.config import Config, get_config
from padclip.errors import (
    DuplicateEntry,
    EntryNotFound,
    InternalError,
    InvalidContent,
    InvalidKey,
    InvalidOutput,
    LengthMismatch,
    NotEncrypted,
)
from padclip.models import Entry, EntryView
from padclip.pad.codec import PadCodec, ScalarPadCodec, get_codec
from padclip.pad.verifier import KeyVerifier, Outcome
from padclip.store import EntryStore, get_store

logger = logging.getLogger(__name__)


class ClipboardService:
    def __init__(
        self,
        store: EntryStore,
        codec: PadCodec | ScalarPadCodec | None = None,
        verifier: KeyVerifier | None = None,
    ) -> None:
        self.store = store
        self.codec = codec or PadCodec()
        self.verifier = verifier or KeyVerifier()

    def write(self, entry_id: str, content: str, key: str | None = None) -> EntryView:
        """Store a new entry. Raises DuplicateEntry, LengthMismatch or InvalidContent."""
        _check_id(entry_id)
        _check_text(content, "content")
        if key is not None:
            _check_text(key, "key")

        if key is None:
            entry = Entry(id=entry_id, content=content)
        else:
            entry = Entry(id=entry_id, content=self.codec.seal(key, content), protected=True, key=key)

        try:
            self.store.insert(entry)
        except DuplicateEntry:
            log_event("entry.duplicate", "Rejected write", target=f"entry:{entry_id}", status="conflict")
            raise

        log_event(
            "entry.create",
            "Stored entry",
            target=f"entry:{entry_id}",
            details={"protected": entry.protected, "codec": self.codec.name},
        )
        return EntryView.of(entry)

    def read_plain(self, entry_id: str) -> EntryView:
        """Fetch an entry's public view. Raises EntryNotFound."""
        return EntryView.of(self._lookup(entry_id))

    def reveal(self, entry_id: str, key: str) -> str:
        """Decode a protected entry with the presented key.

        Raises EntryNotFound, NotEncrypted or InvalidKey. A stored entry that
        verifies but cannot be decoded raises InternalError.
        """
        if not isinstance(key, str):
            raise InvalidContent("key must be text")
        entry = self._lookup(entry_id)
        target = f"entry:{entry_id}"
        if not entry.protected or entry.key is None:
            log_event("entry.reveal_denied", "Entry not protected", target=target, status="denied")
            raise NotEncrypted(entry_id)

        if self.verifier.compare(key, entry.key) is not Outcome.MATCH:
            log_event("entry.reveal_denied", "Key mismatch", target=target, status="denied")
            raise InvalidKey()

        try:
            plaintext = self.codec.reveal(key, entry.content)
        except (LengthMismatch, InvalidOutput, InvalidContent) as e:
            logger.error("Stored entry %s failed to decode: %s", entry_id, e.kind)
            raise InternalError(f"entry {entry_id!r} could not be decoded") from e

        log_event("entry.reveal", "Revealed entry", target=target)
        return plaintext

    def _lookup(self, entry_id: str) -> Entry:
        _check_id(entry_id)
        entry = self.store.lookup(entry_id)
        if entry is None:
            raise EntryNotFound(entry_id)
        return entry


def _check_id(entry_id: str) -> None:
    if not isinstance(entry_id, str) or not entry_id:
        raise InvalidContent("id must be a non-empty string")
    _check_text(entry_id, "id")


def _check_text(value: str, what: str) -> None:
    if not isinstance(value, str):
        raise InvalidContent(f"{what} must be text")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidContent(f"{what} is not valid Unicode text") from e


# Singleton
_service: ClipboardService | None = None
_service_lock = threading.Lock()


def get_service(config: Config | None = None) -> ClipboardService:
    """Get or create the service wired from configuration."""
    global _service
    if _service is not None:
        return _service

    with _service_lock:
        if _service is None:
            cfg = config or get_config()
            logger.info("Clipboard service: store=%s codec=%s", cfg.store, cfg.codec)
            _service = ClipboardService(get_store(cfg), codec=get_codec(cfg.codec))
        return _service


def reset_service() -> None:
    """Drop the singleton service (for testing)."""
    global _service
    _service = None
