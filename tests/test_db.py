"""Tests for padclip.db.connection — pool lifecycle with psycopg2 mocked out."""

from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from padclip.db import connection


@pytest.fixture(autouse=True)
def _no_pool():
    connection._pool = None
    yield
    connection._pool = None


def _mock_pool():
    pool = MagicMock()
    pool.closed = False
    return pool


class TestGetPool:
    def test_created_once(self, monkeypatch):
        monkeypatch.setenv("PADCLIP_DB_NAME", "clips")
        pool = _mock_pool()
        with patch("padclip.db.connection.ThreadedConnectionPool", return_value=pool) as factory:
            assert connection.get_pool() is pool
            assert connection.get_pool() is pool
        factory.assert_called_once()
        assert factory.call_args.kwargs["dbname"] == "clips"

    def test_reopened_after_close(self):
        first, second = _mock_pool(), _mock_pool()
        with patch("padclip.db.connection.ThreadedConnectionPool", side_effect=[first, second]):
            assert connection.get_pool() is first
            connection.close_pool()
            assert connection.get_pool() is second
        first.closeall.assert_called_once()

    def test_unreachable_server(self):
        with patch(
            "padclip.db.connection.ThreadedConnectionPool",
            side_effect=psycopg2.OperationalError("connection refused"),
        ):
            with pytest.raises(ConnectionError, match="PADCLIP_DB_"):
                connection.get_pool()

    def test_close_without_pool(self):
        connection.close_pool()
        assert connection._pool is None


class TestGetConnection:
    def test_returns_connection_to_pool(self):
        pool = _mock_pool()
        conn = pool.getconn.return_value
        with patch("padclip.db.connection.ThreadedConnectionPool", return_value=pool):
            with connection.get_connection() as got:
                assert got is conn
        conn.__exit__.assert_called_once_with(None, None, None)
        pool.putconn.assert_called_once_with(conn)

    def test_error_still_returns_connection(self):
        pool = _mock_pool()
        conn = pool.getconn.return_value
        with patch("padclip.db.connection.ThreadedConnectionPool", return_value=pool):
            with pytest.raises(RuntimeError):
                with connection.get_connection():
                    raise RuntimeError("boom")
        exc_type = conn.__exit__.call_args.args[0]
        assert exc_type is RuntimeError
        pool.putconn.assert_called_once_with(conn)
