"""
Unit tests for database URL resolution.
"""

import pytest

from taskify.core.config import Settings
from taskify.database import resolve_database_url


class TestResolveDatabaseUrl:
    def test_testing_prefers_test_url(self, monkeypatch):
        monkeypatch.setenv("TESTING", "true")
        monkeypatch.setenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///./t.db")

        url = resolve_database_url(Settings(_env_file=None, database_url="postgresql+asyncpg://prod/db"))

        assert url == "sqlite+aiosqlite:///./t.db"

    def test_uses_database_url_outside_tests(self, monkeypatch):
        monkeypatch.delenv("TESTING", raising=False)

        url = resolve_database_url(Settings(_env_file=None, database_url="  sqlite+aiosqlite:///./a.db "))

        assert url == "sqlite+aiosqlite:///./a.db"

    def test_missing_url(self, monkeypatch):
        monkeypatch.delenv("TESTING", raising=False)
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            resolve_database_url(Settings(_env_file=None))
