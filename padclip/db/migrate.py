"""
Schema migrations for the PostgreSQL backend, driven by ``padclip migrate``.

Bundled ``padclip/migrations/NNN_name.sql`` files are applied in version order,
each in its own transaction, and recorded in ``schema_migrations`` together
with the SHA-256 of the file so later edits show up as drift. SQLite creates
its table on first use and never comes through here.
"""

from __future__ import annotations

import hashlib
import re
from pathlib import Path
from typing import NamedTuple

from psycopg2.extras import RealDictCursor

from padclip.db.connection import get_connection

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "migrations"

REQUIRED_TABLES = ["entries", "audit_log"]

_FILENAME_RE = re.compile(r"^(\d+[a-z]?)_.+\.sql$")

_LEDGER_DDL = """
    CREATE TABLE IF NOT EXISTS schema_migrations (
        version     TEXT PRIMARY KEY,
        filename    TEXT NOT NULL,
        applied_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        checksum    TEXT
    )
"""


class Migration(NamedTuple):
    version: str
    path: Path

    @property
    def checksum(self) -> str:
        return hashlib.sha256(self.path.read_bytes()).hexdigest()


def discover(migrations_dir: Path | None = None) -> list[Migration]:
    """Migration files in version order; other files are ignored."""
    found = []
    for path in (migrations_dir or MIGRATIONS_DIR).glob("*.sql"):
        m = _FILENAME_RE.match(path.name)
        if m:
            found.append(Migration(m.group(1), path))
    return sorted(found)


def _recorded() -> dict[str, dict]:
    with get_connection() as conn:
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(_LEDGER_DDL)
            cur.execute("SELECT version, applied_at, checksum FROM schema_migrations")
            return {row["version"]: dict(row) for row in cur.fetchall()}


def status(migrations_dir: Path | None = None) -> list[dict]:
    """One row per migration file: ``applied``, ``pending`` or ``DRIFT``."""
    recorded = _recorded()
    rows = []
    for mig in discover(migrations_dir):
        rec = recorded.get(mig.version)
        if rec is None:
            state, applied_at = "pending", None
        else:
            drifted = rec["checksum"] and rec["checksum"] != mig.checksum
            state, applied_at = ("DRIFT" if drifted else "applied"), rec["applied_at"]
        rows.append({
            "version": mig.version,
            "filename": mig.path.name,
            "status": state,
            "applied_at": applied_at,
        })
    return rows


def apply(
    version: str | None = None,
    dry_run: bool = False,
    migrations_dir: Path | None = None,
) -> list[str]:
    """Apply pending migrations (or just ``version``). Returns the versions handled."""
    recorded = _recorded()
    todo = [
        mig
        for mig in discover(migrations_dir)
        if mig.version not in recorded and version in (None, mig.version)
    ]
    if not todo:
        print("Nothing to apply.")
        return []

    for mig in todo:
        if dry_run:
            print(f"[dry-run] Would apply {mig.path.name} (version {mig.version})")
            continue
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(mig.path.read_text())
                cur.execute(
                    "INSERT INTO schema_migrations (version, filename, checksum) VALUES (%s, %s, %s)",
                    (mig.version, mig.path.name, mig.checksum),
                )
        print(f"Applied {mig.path.name} (version {mig.version})")
    return [mig.version for mig in todo]


def missing_tables() -> list[str]:
    """Return the required tables that do not exist yet."""
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT table_name FROM information_schema.tables WHERE table_schema = 'public'"
            )
            existing = {row[0] for row in cur.fetchall()}
    return [t for t in REQUIRED_TABLES if t not in existing]


def print_status(rows: list[dict]) -> None:
    if not rows:
        print("No migration files found.")
        return
    print(f"{'Version':<10} {'Filename':<30} {'Status':<10} {'Applied At'}")
    print("-" * 72)
    for r in rows:
        at = str(r["applied_at"])[:19] if r["applied_at"] else ""
        print(f"{r['version']:<10} {r['filename']:<30} {r['status']:<10} {at}")
