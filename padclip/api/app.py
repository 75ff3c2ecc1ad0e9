"""
padclip API — FastAPI app exposing store, fetch and reveal.

Routes:
  GET  /health              store reachability
  GET  /api/get?id=         entry view (content only for unprotected entries)
  POST /api/add             {"id", "content", "key"?}
  POST /api/decrypt?id=     {"key"} → plaintext
  GET  /api/audit           recent audit events (PostgreSQL backend only)

A static front-end is served from ``/`` when PADCLIP_STATIC_DIR exists.

Start:
  padclip serve
  # or
  uvicorn padclip.api.app:app --host 127.0.0.1 --port 8000
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from padclip import __version__
from padclip.api.deps import get_clipboard_service
from padclip.api.middleware import CorrelationMiddleware
from padclip.api.models import AddEntryRequest, AddEntryResponse, RevealRequest
from padclip.audit.logger import query_log
from padclip.config import get_config
from padclip.errors import ClipboardError
from padclip.service import ClipboardService

logger = logging.getLogger(__name__)

# Error kind → HTTP status. The core never sees these.
STATUS_BY_KIND = {
    "length_mismatch": 400,
    "invalid_content": 400,
    "not_encrypted": 400,
    "invalid_key": 403,
    "not_found": 404,
    "duplicate": 409,
    "invalid_output": 500,
    "internal_error": 500,
}


async def clipboard_error_handler(request: Request, exc: ClipboardError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, 500)
    if status_code >= 500:
        logger.error("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc)
    return JSONResponse(exc.to_dict(), status_code=status_code)


def create_app(
    service: ClipboardService | None = None,
    static_dir: Path | None = None,
) -> FastAPI:
    """Build the app. ``service`` defaults to the configured singleton on first request."""
    app = FastAPI(title="padclip", version=__version__)
    app.state.service = service
    app.add_middleware(CorrelationMiddleware)
    app.add_exception_handler(ClipboardError, clipboard_error_handler)

    @app.get("/health")
    def health(svc: ClipboardService = Depends(get_clipboard_service)):
        try:
            return svc.store.check_health()
        except Exception as e:
            logger.warning("Health check failed: %s", e)
            return JSONResponse({"status": "error", "error": str(e)}, status_code=503)

    @app.get("/api/get")
    def api_get_entry(
        id: str = Query(..., min_length=1),
        svc: ClipboardService = Depends(get_clipboard_service),
    ):
        return svc.read_plain(id).model_dump()

    @app.post("/api/add", response_model=AddEntryResponse)
    def api_add_entry(
        body: AddEntryRequest,
        svc: ClipboardService = Depends(get_clipboard_service),
    ):
        view = svc.write(body.id, body.content, body.key)
        return AddEntryResponse(id=view.id, protected=view.protected)

    @app.post("/api/decrypt", response_class=PlainTextResponse)
    def api_decrypt(
        body: RevealRequest,
        id: str = Query(..., min_length=1),
        svc: ClipboardService = Depends(get_clipboard_service),
    ):
        return PlainTextResponse(svc.reveal(id, body.key))

    @app.get("/api/audit")
    def api_query_audit(
        event_type: str | None = Query(None),
        target: str | None = Query(None),
        since: str | None = Query(None),
        status: str | None = Query(None),
        limit: int = Query(50, ge=1, le=500),
    ):
        results = query_log(
            limit=limit, event_type=event_type, target=target, since=since, status=status
        )
        return {"events": results, "count": len(results)}

    if static_dir is not None and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


app = create_app(static_dir=get_config().static_dir)
