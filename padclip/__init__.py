"""
padclip — a shared-secret clipboard with one-time-pad protected entries.

Public API:
    ClipboardService(store)       → write / read_plain / reveal
    get_service()                 → service wired from environment config
"""

from __future__ import annotations

__version__ = "0.1.0"

from padclip.service import ClipboardService, get_service  # noqa: E402

__all__ = ["ClipboardService", "get_service", "__version__"]
