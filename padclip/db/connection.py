"""
PostgreSQL connection pool, created lazily from ``get_config().db``.

``get_connection()`` lends out one connection for one transaction: the
``with conn`` block commits when the body finishes and rolls back when it
raises. The connection always goes back to the pool.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

import psycopg2
from psycopg2.pool import ThreadedConnectionPool

from padclip.config import DatabaseConfig, get_config

logger = logging.getLogger(__name__)

POOL_SIZE = 10

_pool: ThreadedConnectionPool | None = None
_pool_lock = threading.Lock()


def _open_pool(db: DatabaseConfig, size: int) -> ThreadedConnectionPool:
    where = f"{db.host or 'local socket'}:{db.port}/{db.name}"
    logger.info("Opening PostgreSQL pool (%d connections) to %s as %s", size, where, db.user)
    try:
        return ThreadedConnectionPool(1, size, **db.dict)
    except psycopg2.OperationalError as e:
        raise ConnectionError(
            f"PostgreSQL unreachable at {where}: {e}\n"
            f"Set PADCLIP_DB_* to a running server, or use PADCLIP_STORE=sqlite."
        ) from e


def get_pool(size: int = POOL_SIZE) -> ThreadedConnectionPool:
    """Return the shared pool, opening it on first use or after ``close_pool``."""
    global _pool
    with _pool_lock:
        if _pool is None or _pool.closed:
            _pool = _open_pool(get_config().db, size)
        return _pool


@contextmanager
def get_connection() -> Iterator[psycopg2.extensions.connection]:
    pool = get_pool()
    conn = pool.getconn()
    try:
        with conn:
            yield conn
    finally:
        pool.putconn(conn)


def close_pool() -> None:
    global _pool
    with _pool_lock:
        if _pool is not None:
            _pool.closeall()
            _pool = None
