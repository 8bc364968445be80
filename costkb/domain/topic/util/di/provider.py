from dishka import provide

from costkb.config import Config
from costkb.domain.topic.service.activity import TopicActivityService
from costkb.domain.topic.service.cache import ActiveTopicCache
from costkb.util.di.base import Provider
from costkb.util.di.scope import Scope


class TopicProvider(Provider):
    @provide(scope=Scope.APP)
    def get_active_topic_cache(self, config: Config) -> ActiveTopicCache:
        return ActiveTopicCache(ttl=config.search.topic_cache_ttl)

    activity_service = provide(TopicActivityService, scope=Scope.APP)
