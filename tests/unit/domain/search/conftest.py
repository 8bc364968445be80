from unittest.mock import AsyncMock

import pytest

from costkb.domain.topic.service.activity import TopicActivityService
from costkb.domain.topic.service.cache import ActiveTopicCache

ALL_TOPICS = {"Guidance Notes", "OC4IDS", "Independent Reviews", "Infrastructure Transparency Index"}


@pytest.fixture
def topic_source() -> AsyncMock:
    source = AsyncMock()
    source.list_active_names.return_value = set(ALL_TOPICS)
    return source


@pytest.fixture
def topics(topic_source) -> TopicActivityService:
    return TopicActivityService(cache=ActiveTopicCache(), source=topic_source)


@pytest.fixture
def store() -> AsyncMock:
    store = AsyncMock()
    store.find_text_matches.return_value = []
    store.find_semantic_candidates.return_value = []
    store.count_published.return_value = 0
    store.facet_counts.return_value = []
    return store
