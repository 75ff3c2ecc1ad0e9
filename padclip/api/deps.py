"""API dependency injection — shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from padclip.service import ClipboardService, get_service


def get_clipboard_service(request: Request) -> ClipboardService:
    """Service attached to the app at creation, else the configured singleton."""
    service = getattr(request.app.state, "service", None)
    return service if service is not None else get_service()
