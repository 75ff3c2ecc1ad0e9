"""
Key verification for protected entries.

Raw keys are never compared directly. Both the presented and the stored key are
reduced to HMAC-SHA256 digests under a secret that lives only in this process,
and the two 32-byte digests are compared with ``hmac.compare_digest``, which
scans every byte regardless of where they differ. The time taken therefore does
not depend on the mismatch position, nor on either key's length beyond the cost
of hashing it.

No per-character delay, and no elapsed-time or progress figure on failure.
"""

from __future__ import annotations

import enum
import hashlib
import hmac
import secrets


class Outcome(enum.Enum):
    MATCH = "match"
    MISMATCH = "mismatch"

    def __bool__(self) -> bool:
        return self is Outcome.MATCH


class KeyVerifier:
    """Constant-time comparison of a presented key against a stored one."""

    def __init__(self, secret: bytes | None = None) -> None:
        self._secret = secret if secret is not None else secrets.token_bytes(32)

    def digest(self, key: str | bytes) -> bytes:
        if isinstance(key, str):
            # lone surrogates still digest, and can never equal a stored key
            key = key.encode("utf-8", "surrogatepass")
        return hmac.new(self._secret, key, hashlib.sha256).digest()

    def compare(self, presented: str | bytes, stored: str | bytes) -> Outcome:
        """Return ``Outcome.MATCH`` iff the keys are identical."""
        if hmac.compare_digest(self.digest(presented), self.digest(stored)):
            return Outcome.MATCH
        return Outcome.MISMATCH
