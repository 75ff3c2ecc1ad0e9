"""
Root-level shared test fixtures.

Inherited by tests/ and the package-local test suites.
"""

from __future__ import annotations

import uuid

import pytest

from padclip.audit.logger import reset_connection_factory
from padclip.config import reset_config
from padclip.service import ClipboardService, reset_service
from padclip.store import MemoryEntryStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove padclip env vars and singletons that leak between tests."""
    for key in [
        "PADCLIP_WORKSPACE",
        "PADCLIP_STORE",
        "PADCLIP_SQLITE_PATH",
        "PADCLIP_CODEC",
        "PADCLIP_HOST",
        "PADCLIP_PORT",
        "PADCLIP_STATIC_DIR",
        "PADCLIP_LOG_LEVEL",
        "PADCLIP_DB_HOST",
        "PADCLIP_DB_PORT",
        "PADCLIP_DB_NAME",
        "PADCLIP_DB_USER",
        "PADCLIP_DB_PASSWORD",
    ]:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    reset_service()
    reset_connection_factory()
    yield
    reset_config()
    reset_service()
    reset_connection_factory()


@pytest.fixture
def test_prefix():
    """Unique prefix for test isolation."""
    return f"test_{uuid.uuid4().hex[:8]}"


@pytest.fixture
def store():
    return MemoryEntryStore()


@pytest.fixture
def service(store):
    """A service over an empty in-memory store with the byte codec."""
    return ClipboardService(store)
