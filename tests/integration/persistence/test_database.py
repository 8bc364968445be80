"""Tests for engine construction."""

import pytest

from costkb.config import Config, DatabaseConfig
from costkb.domain.shared.error import ConfigurationError
from costkb.infrastructure.persistence.database import _expand_sqlite_path, create_db_engine


class TestCreateDbEngine:
    def test_rejects_sync_driver(self):
        config = Config(database=DatabaseConfig(url="postgresql://localhost/costkb"))
        with pytest.raises(ConfigurationError, match="postgresql"):
            create_db_engine(config)

    @pytest.mark.asyncio
    async def test_in_memory_sqlite(self):
        engine = create_db_engine(Config(database=DatabaseConfig(url="sqlite+aiosqlite://")))
        assert engine.dialect.name == "sqlite"
        await engine.dispose()


class TestExpandSqlitePath:
    def test_memory_url_untouched(self):
        assert _expand_sqlite_path("sqlite+aiosqlite:///:memory:") == "sqlite+aiosqlite:///:memory:"

    def test_relative_path_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        url = _expand_sqlite_path("sqlite+aiosqlite:///data/costkb.db")
        assert url == f"sqlite+aiosqlite:///{tmp_path}/data/costkb.db"
        assert (tmp_path / "data").is_dir()

    def test_postgres_untouched(self):
        url = "postgresql+asyncpg://user@localhost/costkb"
        assert _expand_sqlite_path(url) == url
