from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from costkb.config import Config
from costkb.domain.resource.port.repository import ResourceRepository
from costkb.domain.search.port.store import SearchStore
from costkb.domain.topic.port.source import TopicRepository, TopicSource
from costkb.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from costkb.infrastructure.persistence.repository.resource import SqlResourceRepository
from costkb.infrastructure.persistence.repository.search import SqlSearchStore
from costkb.infrastructure.persistence.repository.topic import SqlTopicRepository
from costkb.util.di.base import Provider
from costkb.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    def get_engine(self, config: Config) -> AsyncEngine:
        return create_db_engine(config)

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    # Read models open their own short-lived sessions
    @provide(scope=Scope.APP)
    def get_search_store(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> SearchStore:
        return SqlSearchStore(session_factory)

    @provide(scope=Scope.APP)
    def get_topic_repo(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> SqlTopicRepository:
        return SqlTopicRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_topic_source(self, repo: SqlTopicRepository) -> TopicSource:
        return repo

    @provide(scope=Scope.APP)
    def get_topic_repository(self, repo: SqlTopicRepository) -> TopicRepository:
        return repo

    # UOW-scoped repositories
    resource_repo = provide(
        SqlResourceRepository, scope=Scope.UOW, provides=ResourceRepository
    )
