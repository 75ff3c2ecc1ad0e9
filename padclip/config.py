"""
Centralized configuration for padclip.

All configuration is loaded from environment variables with sensible defaults.
A ``.env`` file in the working directory is read first when present.

Usage:
    from padclip.config import get_config
    cfg = get_config()
    print(cfg.store)         # "sqlite"
    print(cfg.sqlite_path)   # "/home/user/padclip/db/clipboard.db"
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

STORES = ("memory", "sqlite", "postgres")


@dataclass(frozen=True)
class DatabaseConfig:
    """PostgreSQL connection parameters."""

    host: str = ""  # empty = Unix socket (peer auth); set to 127.0.0.1 for TCP
    port: int = 5432
    name: str = "padclip"
    user: str = "padclip"
    password: str = ""

    @property
    def dsn(self) -> str:
        """Return a psycopg2-compatible DSN string."""
        parts = [f"dbname={self.name}"]
        if self.host:
            parts.append(f"host={self.host}")
        parts.append(f"port={self.port}")
        if self.user:
            parts.append(f"user={self.user}")
        if self.password:
            parts.append(f"password={self.password}")
        return " ".join(parts)

    @property
    def dict(self) -> dict[str, str | int]:
        """Return a psycopg2.connect() kwargs dict."""
        d: dict[str, str | int] = {
            "dbname": self.name,
            "port": self.port,
        }
        if self.host:
            d["host"] = self.host
        if self.user:
            d["user"] = self.user
        if self.password:
            d["password"] = self.password
        return d


@dataclass(frozen=True)
class Config:
    """Top-level padclip configuration."""

    workspace: Path = field(default_factory=lambda: Path.home() / "padclip")
    store: str = "sqlite"
    sqlite_path: Path = field(
        default_factory=lambda: Path.home() / "padclip" / "db" / "clipboard.db"
    )
    db: DatabaseConfig = field(default_factory=DatabaseConfig)
    codec: str = "bytes"

    # API server
    host: str = "127.0.0.1"
    port: int = 8000
    static_dir: Path = field(default_factory=lambda: Path.home() / "padclip" / "static")
    log_level: str = "INFO"

    @property
    def api_url(self) -> str:
        return f"http://{self.host}:{self.port}"


# Singleton
_config: Config | None = None


def get_config() -> Config:
    """Get or create the singleton config from environment variables."""
    global _config
    if _config is not None:
        return _config
    _config = _load_from_env()
    return _config


def _load_from_env() -> Config:
    """Load configuration from environment variables."""
    load_dotenv()

    workspace = Path(os.environ.get("PADCLIP_WORKSPACE", Path.home() / "padclip"))

    store = os.environ.get("PADCLIP_STORE", "sqlite").strip().lower()
    if store not in STORES:
        raise ValueError(f"PADCLIP_STORE must be one of {STORES}, got {store!r}")

    db = DatabaseConfig(
        host=os.environ.get("PADCLIP_DB_HOST", ""),
        port=int(os.environ.get("PADCLIP_DB_PORT", "5432")),
        name=os.environ.get("PADCLIP_DB_NAME", "padclip"),
        user=os.environ.get("PADCLIP_DB_USER", os.environ.get("USER", "padclip")),
        password=os.environ.get("PADCLIP_DB_PASSWORD", ""),
    )

    return Config(
        workspace=workspace,
        store=store,
        sqlite_path=Path(
            os.environ.get("PADCLIP_SQLITE_PATH", workspace / "db" / "clipboard.db")
        ),
        db=db,
        codec=os.environ.get("PADCLIP_CODEC", "bytes").strip().lower(),
        host=os.environ.get("PADCLIP_HOST", "127.0.0.1"),
        port=int(os.environ.get("PADCLIP_PORT", "8000")),
        static_dir=Path(os.environ.get("PADCLIP_STATIC_DIR", workspace / "static")),
        log_level=os.environ.get("PADCLIP_LOG_LEVEL", "INFO").upper(),
    )


def reset_config() -> None:
    """Reset the singleton config (for testing)."""
    global _config
    _config = None
