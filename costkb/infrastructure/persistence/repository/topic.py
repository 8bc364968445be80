from typing import List

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from costkb.domain.topic.model.topic import Topic
from costkb.domain.topic.port.source import TopicRepository
from costkb.infrastructure.persistence.mappers.topic import row_to_topic, topic_to_dict
from costkb.infrastructure.persistence.tables import topics_table


class SqlTopicRepository(TopicRepository):
    """Topics, read through short-lived sessions so the app-wide cache can use it."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def list_active_names(self) -> set[str]:
        stmt = select(topics_table.c.name).where(topics_table.c.is_active.is_(True))
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return set(result.scalars().all())

    async def list(self, *, include_inactive: bool = False) -> List[Topic]:
        stmt = select(topics_table).order_by(
            topics_table.c.display_order, topics_table.c.name
        )
        if not include_inactive:
            stmt = stmt.where(topics_table.c.is_active.is_(True))
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [row_to_topic(dict(r)) for r in result.mappings().all()]

    async def save(self, topic: Topic) -> None:
        values = topic_to_dict(topic)
        async with self.session_factory() as session:
            stmt = select(topics_table.c.slug).where(topics_table.c.slug == topic.slug)
            if (await session.execute(stmt)).first() is not None:
                await session.execute(
                    update(topics_table).where(topics_table.c.slug == topic.slug).values(**values)
                )
            else:
                await session.execute(insert(topics_table).values(**values))
            await session.commit()
