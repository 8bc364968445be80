"""Async engine and session factory."""

import os
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from costkb.config import Config
from costkb.domain.shared.error import ConfigurationError

SUPPORTED_SCHEMES = ("sqlite+aiosqlite", "postgresql+asyncpg")


def _expand_sqlite_path(url: str) -> str:
    """Make a file-based SQLite path absolute and create its directory."""
    if not url.startswith("sqlite") or ":memory:" in url or "///" not in url:
        return url

    prefix_end = url.index("///") + 3
    prefix, path = url[:prefix_end], url[prefix_end:]
    abs_path = os.path.abspath(os.path.expanduser(path))
    Path(abs_path).parent.mkdir(parents=True, exist_ok=True)
    return f"{prefix}{abs_path}"


def create_db_engine(config: Config) -> AsyncEngine:
    url = _expand_sqlite_path(config.database.url)

    if not url.startswith(SUPPORTED_SCHEMES):
        raise ConfigurationError(f"Unsupported database URL: {url.split(':', 1)[0]}")

    if url.startswith("sqlite"):
        engine_kwargs: dict[str, Any] = {
            "echo": config.database.echo,
            # aiosqlite hands the connection between threads
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    else:
        engine_kwargs = {
            "echo": config.database.echo,
            "pool_pre_ping": True,
            "pool_size": 5,
            "max_overflow": 10,
        }

    return create_async_engine(url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
