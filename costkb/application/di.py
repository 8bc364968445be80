from dishka import AsyncContainer, make_async_container

from costkb.config import Config
from costkb.domain.resource.util.di import ResourceProvider
from costkb.domain.search.util.di import SearchProvider
from costkb.domain.topic.util.di import TopicProvider
from costkb.infrastructure.persistence import PersistenceProvider
from costkb.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()

    return make_async_container(
        PersistenceProvider(),
        ResourceProvider(),
        TopicProvider(),
        SearchProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
