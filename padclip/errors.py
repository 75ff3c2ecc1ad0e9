"""
Clipboard error taxonomy.

Every failure the core can report is a ``ClipboardError`` subclass with a stable
``kind`` string and a ``to_dict()`` payload. Transport layers map ``kind`` to
their own status codes (see ``padclip.api.app``); nothing in here knows about
HTTP.

None of these errors ever carry key material or plaintext.
"""

from __future__ import annotations


class ClipboardError(Exception):
    """Base class for all clipboard failures."""

    kind = "internal_error"

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": str(self)}


class LengthMismatch(ClipboardError, ValueError):
    """Key and data lengths differ (measured in the codec's unit)."""

    kind = "length_mismatch"

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"key length {actual} != data length {expected}")
        self.expected = expected
        self.actual = actual

    def to_dict(self) -> dict:
        return {**super().to_dict(), "expected": self.expected, "actual": self.actual}


class InvalidContent(ClipboardError, ValueError):
    """Request payload is unusable (empty id, non-text content, bad stored encoding)."""

    kind = "invalid_content"


class DuplicateEntry(ClipboardError):
    kind = "duplicate"

    def __init__(self, entry_id: str) -> None:
        super().__init__(f"entry {entry_id!r} already exists")
        self.entry_id = entry_id


class EntryNotFound(ClipboardError, LookupError):
    kind = "not_found"

    def __init__(self, entry_id: str) -> None:
        super().__init__(f"entry {entry_id!r} not found")
        self.entry_id = entry_id


class NotEncrypted(ClipboardError):
    kind = "not_encrypted"

    def __init__(self, entry_id: str) -> None:
        super().__init__(f"entry {entry_id!r} is not protected")
        self.entry_id = entry_id


class InvalidKey(ClipboardError):
    """Presented key does not match. Message is fixed; no metadata is attached."""

    kind = "invalid_key"

    def __init__(self) -> None:
        super().__init__("invalid key")


class InvalidOutput(ClipboardError):
    """Scalar pad produced a value that is not a legal Unicode code point."""

    kind = "invalid_output"

    def __init__(self, position: int) -> None:
        super().__init__(f"pad output at position {position} is not a valid code point")
        self.position = position


class InternalError(ClipboardError):
    kind = "internal_error"


__all__ = [
    "ClipboardError",
    "DuplicateEntry",
    "EntryNotFound",
    "InternalError",
    "InvalidContent",
    "InvalidKey",
    "InvalidOutput",
    "LengthMismatch",
    "NotEncrypted",
]
