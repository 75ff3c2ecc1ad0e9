"""Pad transform and key verification."""

from padclip.pad.codec import PadCodec, ScalarPadCodec, apply, get_codec
from padclip.pad.verifier import KeyVerifier, Outcome

__all__ = ["KeyVerifier", "Outcome", "PadCodec", "ScalarPadCodec", "apply", "get_codec"]
