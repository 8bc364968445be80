from abc import abstractmethod
from typing import Protocol

from costkb.domain.shared.port import Port
from costkb.domain.topic.model.topic import Topic


class TopicSource(Port, Protocol):
    """Where the activity cache reloads active topic names from."""

    @abstractmethod
    async def list_active_names(self) -> set[str]: ...


class TopicRepository(TopicSource, Protocol):
    @abstractmethod
    async def list(self, *, include_inactive: bool = False) -> list[Topic]: ...

    @abstractmethod
    async def save(self, topic: Topic) -> None: ...
