from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.shared.service import Service
from costkb.domain.topic.port.source import TopicSource
from costkb.domain.topic.service.cache import ActiveTopicCache
from costkb.domain.topic.service.category import map_resource_to_topic


class TopicActivityService(Service):
    """Filters resources down to those whose derived topic is active."""

    cache: ActiveTopicCache
    source: TopicSource

    async def active_names(self) -> frozenset[str]:
        return await self.cache.get(self.source)

    async def keep_active(self, resources: list[Resource]) -> list[Resource]:
        active = await self.active_names()
        return [r for r in resources if map_resource_to_topic(r, active) in active]
