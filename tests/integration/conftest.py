"""Fixtures for integration tests against in-memory SQLite."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from costkb.infrastructure.persistence.database import create_session_factory
from costkb.infrastructure.persistence.repository.resource import SqlResourceRepository
from costkb.infrastructure.persistence.tables import metadata


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def save_resources(session_factory):
    """Persist resources through the repository and commit."""

    async def _save(*resources):
        async with session_factory() as session:
            repo = SqlResourceRepository(session)
            for resource in resources:
                await repo.save(resource)
            await session.commit()
        return resources

    return _save
