"""
padclip audit log — structured records of clipboard operations.

Event types:
  - entry.create          — an entry was stored
  - entry.duplicate       — a write hit an existing id
  - entry.reveal          — a protected entry was decoded
  - entry.reveal_denied   — a reveal was refused (wrong key, not protected)

Every event goes to the ``padclip.audit`` logger. With the PostgreSQL backend
(or a connection factory installed for tests) it is also written to the
``audit_log`` table. Callers pass ids and flags only, never keys or content.

Usage:
    from padclip.audit.logger import log_event, query_log
    log_event("entry.create", "Stored entry", target="entry:abc", details={"protected": True})
"""

from __future__ import annotations

import logging

from psycopg2.extras import Json

logger = logging.getLogger("padclip.audit")

# Lazy connection resolution — don't touch the pool at import time so tests can mock
_conn_factory = None


def _db_enabled() -> bool:
    if _conn_factory is not None:
        return True
    from padclip.config import get_config

    return get_config().store == "postgres"


def _get_connection():
    if _conn_factory is not None:
        return _conn_factory()

    from padclip.db.connection import get_pool

    return get_pool().getconn()


def _release_connection(conn):
    """Return connection to pool if using pooled connections."""
    if _conn_factory is not None:
        conn.close()
        return
    from padclip.db.connection import get_pool

    get_pool().putconn(conn)


def set_connection_factory(factory):
    """Override connection factory for testing."""
    global _conn_factory
    _conn_factory = factory


def reset_connection_factory():
    """Reset connection factory to default."""
    global _conn_factory
    _conn_factory = None


def log_event(
    event_type: str,
    action: str,
    *,
    target: str | None = None,
    details: dict | None = None,
    status: str = "ok",
) -> dict | None:
    """Log a structured audit event.

    Returns {"id": int, "timestamp": str} when written to the database, None
    otherwise. Failures are logged but never raise — audit must not break callers.
    """
    logger.info(
        "%s %s target=%s status=%s details=%s", event_type, action, target, status, details or {}
    )
    try:
        if not _db_enabled():
            return None
        conn = _get_connection()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO audit_log (event_type, action, target, status, details)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING id, timestamp
                """,
                (event_type, action, target, status, Json(details) if details else None),
            )
            row = cur.fetchone()
            conn.commit()
        finally:
            _release_connection(conn)
        return {"id": row[0], "timestamp": row[1].isoformat()}
    except Exception as e:
        logger.warning("Audit log_event failed: %s", e)
        return None


def query_log(
    limit: int = 50,
    event_type: str | None = None,
    target: str | None = None,
    since: str | None = None,
    status: str | None = None,
) -> list[dict]:
    """Query the audit table with filters. Empty when no database is configured."""
    try:
        if not _db_enabled():
            return []
        conn = _get_connection()
        try:
            cur = conn.cursor()

            query = (
                "SELECT id, timestamp, event_type, action, target, status, details "
                "FROM audit_log WHERE 1=1"
            )
            params: list = []

            if event_type:
                query += " AND event_type = %s"
                params.append(event_type)
            if target:
                query += " AND target = %s"
                params.append(target)
            if since:
                query += " AND timestamp >= %s"
                params.append(since)
            if status:
                query += " AND status = %s"
                params.append(status)

            query += " ORDER BY timestamp DESC LIMIT %s"
            params.append(limit)

            cur.execute(query, params)
            rows = cur.fetchall()
        finally:
            _release_connection(conn)

        return [
            {
                "id": r[0],
                "timestamp": r[1].isoformat(),
                "event_type": r[2],
                "action": r[3],
                "target": r[4],
                "status": r[5],
                "details": r[6],
            }
            for r in rows
        ]
    except Exception as e:
        logger.warning("Audit query_log failed: %s", e)
        return []
