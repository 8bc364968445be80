import logging
import time
from collections.abc import Callable

from costkb.domain.topic.port.source import TopicSource

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60.0


class ActiveTopicCache:
    """Process-wide set of active topic names, reloaded lazily once stale.

    Concurrent callers that find the cache stale may each reload it; the last
    load wins. Topic sets are small and reloads are idempotent, so there is
    no lock.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._names: frozenset[str] | None = None
        self._loaded_at: float | None = None

    @property
    def loaded_at(self) -> float | None:
        return self._loaded_at

    def is_stale(self) -> bool:
        if self._names is None or self._loaded_at is None:
            return True
        return self._clock() - self._loaded_at >= self.ttl

    async def get(self, source: TopicSource) -> frozenset[str]:
        names = self._names
        if names is None or self.is_stale():
            names = frozenset(await source.list_active_names())
            self._names = names
            self._loaded_at = self._clock()
            logger.debug("Reloaded %d active topics", len(names))
        return names

    def invalidate(self) -> None:
        self._names = None
        self._loaded_at = None
