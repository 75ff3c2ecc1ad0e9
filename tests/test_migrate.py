"""Tests for padclip.db.migrate — migration discovery and application with a mocked connection."""

from contextlib import contextmanager
from unittest.mock import MagicMock, patch

import pytest

from padclip.db import migrate


@contextmanager
def _fake_connection(conn):
    yield conn


def _conn_with_recorded(recorded_rows):
    conn = MagicMock()
    cur = MagicMock()
    cur.fetchall.return_value = recorded_rows
    conn.cursor.return_value.__enter__.return_value = cur
    return conn, cur


def _patched(conn):
    return patch("padclip.db.migrate.get_connection", lambda: _fake_connection(conn))


class TestDiscover:
    def test_bundled_migrations(self):
        versions = [v for v, _ in migrate.discover()]
        assert versions == ["001", "002"]

    def test_ignores_other_files(self, tmp_path):
        (tmp_path / "002b_b.sql").write_text("SELECT 2;")
        (tmp_path / "001_a.sql").write_text("SELECT 1;")
        (tmp_path / "README.md").write_text("x")
        (tmp_path / "notes.sql").write_text("x")
        assert [m.version for m in migrate.discover(tmp_path)] == ["001", "002b"]

    def test_checksum_follows_file(self, tmp_path):
        path = tmp_path / "001_a.sql"
        path.write_text("SELECT 1;")
        before = migrate.Migration("001", path).checksum
        path.write_text("SELECT 2;")
        assert migrate.Migration("001", path).checksum != before

    def test_entries_schema_matches_record_layout(self):
        sql = (migrate.MIGRATIONS_DIR / "001_entries.sql").read_text()
        for column in ("id", "content", "protected", "key"):
            assert f"{column} " in sql


class TestApply:
    def test_applies_pending(self, tmp_path, capsys):
        (tmp_path / "001_a.sql").write_text("CREATE TABLE a (x INT);")
        (tmp_path / "002_b.sql").write_text("CREATE TABLE b (x INT);")
        conn, cur = _conn_with_recorded([{"version": "001", "applied_at": None, "checksum": None}])

        with _patched(conn):
            applied = migrate.apply(migrations_dir=tmp_path)

        assert applied == ["002"]
        executed = [c.args[0] for c in cur.execute.call_args_list]
        assert "CREATE TABLE b (x INT);" in executed
        assert "CREATE TABLE a (x INT);" not in executed
        assert "Applied 002_b.sql" in capsys.readouterr().out

    def test_single_version(self, tmp_path):
        (tmp_path / "001_a.sql").write_text("CREATE TABLE a (x INT);")
        (tmp_path / "002_b.sql").write_text("CREATE TABLE b (x INT);")
        conn, cur = _conn_with_recorded([])

        with _patched(conn):
            assert migrate.apply(version="002", migrations_dir=tmp_path) == ["002"]

        executed = [c.args[0] for c in cur.execute.call_args_list]
        assert "CREATE TABLE a (x INT);" not in executed

    def test_dry_run_executes_nothing(self, tmp_path, capsys):
        (tmp_path / "001_a.sql").write_text("CREATE TABLE a (x INT);")
        conn, cur = _conn_with_recorded([])

        with _patched(conn):
            applied = migrate.apply(dry_run=True, migrations_dir=tmp_path)

        assert applied == ["001"]
        executed = [c.args[0] for c in cur.execute.call_args_list]
        assert "CREATE TABLE a (x INT);" not in executed
        assert "[dry-run]" in capsys.readouterr().out

    def test_nothing_to_apply(self, tmp_path, capsys):
        conn, _ = _conn_with_recorded([])
        with _patched(conn):
            assert migrate.apply(migrations_dir=tmp_path) == []
        assert "Nothing to apply." in capsys.readouterr().out

    def test_failure_propagates(self, tmp_path, capsys):
        (tmp_path / "001_a.sql").write_text("CREATE TABLE broken (;")
        conn, cur = _conn_with_recorded([])

        def execute(sql, params=None):
            if "broken" in sql:
                raise RuntimeError("syntax error")

        cur.execute.side_effect = execute
        with _patched(conn):
            with pytest.raises(RuntimeError, match="syntax error"):
                migrate.apply(migrations_dir=tmp_path)
        assert "Applied" not in capsys.readouterr().out


class TestStatus:
    def test_pending_applied_and_drift(self, tmp_path):
        (tmp_path / "001_a.sql").write_text("SELECT 1;")
        (tmp_path / "002_b.sql").write_text("SELECT 2;")
        (tmp_path / "003_c.sql").write_text("SELECT 3;")
        good = migrate.Migration("001", tmp_path / "001_a.sql").checksum
        conn, _ = _conn_with_recorded([
            {"version": "001", "applied_at": None, "checksum": good},
            {"version": "002", "applied_at": None, "checksum": "stale"},
        ])

        with _patched(conn):
            rows = migrate.status(migrations_dir=tmp_path)

        assert [r["status"] for r in rows] == ["applied", "DRIFT", "pending"]
        assert [r["filename"] for r in rows] == ["001_a.sql", "002_b.sql", "003_c.sql"]

    def test_print_status(self, capsys):
        migrate.print_status([
            {"version": "001", "filename": "001_entries.sql", "status": "applied",
             "applied_at": "2026-01-02 03:04:05.678+00"},
            {"version": "002", "filename": "002_audit_log.sql", "status": "pending", "applied_at": None},
        ])
        out = capsys.readouterr().out
        assert "2026-01-02 03:04:05" in out
        assert ".678" not in out
        assert "pending" in out

    def test_print_status_empty(self, capsys):
        migrate.print_status([])
        assert "No migration files found." in capsys.readouterr().out

    def test_missing_tables(self):
        conn, _ = _conn_with_recorded([("entries",)])
        with _patched(conn):
            assert migrate.missing_tables() == ["audit_log"]
