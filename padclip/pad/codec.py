"""
One-time-pad transform.

Key and data must have the same length; each unit of the data is XORed with the
unit of the key at the same position. The transform is its own inverse, so the
same call encodes and decodes.

Two codecs share one interface:

- ``PadCodec`` works on UTF-8 bytes. Stored content is the hex encoding of the
  XOR output. This is the default.
- ``ScalarPadCodec`` works on Unicode code points and stores the XOR output as a
  string. XOR is not closed over valid code points, so this codec can fail with
  ``InvalidOutput`` for perfectly ordinary input. Only select it when an
  existing database was written that way.

This is not encryption in any modern sense: reusing a key, or knowing part of
the plaintext, reveals the rest.
"""

from __future__ import annotations

from padclip.errors import InvalidContent, InvalidOutput, LengthMismatch

_MAX_CODE_POINT = 0x10FFFF
_SURROGATES = range(0xD800, 0xE000)


def apply(key: bytes, data: bytes) -> bytes:
    """XOR ``data`` with ``key``. Raises ``LengthMismatch`` if lengths differ."""
    if len(key) != len(data):
        raise LengthMismatch(expected=len(data), actual=len(key))
    return bytes(d ^ k for d, k in zip(data, key))


def apply_scalars(key: str, data: str) -> str:
    """XOR ``data`` with ``key`` code point by code point."""
    if len(key) != len(data):
        raise LengthMismatch(expected=len(data), actual=len(key))
    out = []
    for i, (d, k) in enumerate(zip(data, key)):
        value = ord(d) ^ ord(k)
        if value > _MAX_CODE_POINT or value in _SURROGATES:
            raise InvalidOutput(position=i)
        out.append(chr(value))
    return "".join(out)


class PadCodec:
    """Byte-level pad over UTF-8 text, hex at the storage boundary."""

    name = "bytes"
    unit = "byte"

    def measure(self, text: str) -> int:
        return len(text.encode("utf-8"))

    def apply(self, key: bytes, data: bytes) -> bytes:
        return apply(key, data)

    def seal(self, key: str, text: str) -> str:
        """Encode ``text`` under ``key`` into its stored form."""
        return apply(key.encode("utf-8"), text.encode("utf-8")).hex()

    def reveal(self, key: str, stored: str) -> str:
        """Decode stored content back to text."""
        try:
            data = bytes.fromhex(stored)
        except ValueError as e:
            raise InvalidContent("stored content is not hex-encoded") from e
        plain = apply(key.encode("utf-8"), data)
        try:
            return plain.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidContent("decoded content is not valid UTF-8") from e


class ScalarPadCodec:
    """Code-point pad. Output may be rejected with ``InvalidOutput``."""

    name = "scalar"
    unit = "code point"

    def measure(self, text: str) -> int:
        return len(text)

    def apply(self, key: str, data: str) -> str:
        return apply_scalars(key, data)

    def seal(self, key: str, text: str) -> str:
        return apply_scalars(key, text)

    def reveal(self, key: str, stored: str) -> str:
        return apply_scalars(key, stored)


CODECS = {
    PadCodec.name: PadCodec,
    ScalarPadCodec.name: ScalarPadCodec,
}


def get_codec(name: str = "bytes") -> PadCodec | ScalarPadCodec:
    """Return a codec instance by name (``bytes`` or ``scalar``)."""
    try:
        return CODECS[name]()
    except KeyError:
        raise ValueError(f"Unknown codec {name!r}, expected one of {sorted(CODECS)}") from None
