from abc import abstractmethod
from typing import Protocol

from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.search.model.value import SearchFilters, SearchHit
from costkb.domain.search.port.store import SearchStore
from costkb.domain.search.strategy.text import query_terms
from costkb.domain.shared.error import InfrastructureError, UpstreamFailureError
from costkb.domain.shared.service import Service
from costkb.domain.topic.service.activity import TopicActivityService

TERM_INCREMENT = 0.1
EMBEDDING_BONUS = 0.2
MAX_SCORE = 1.0


class SemanticStrategy(Protocol):
    """Anything that can rank published resources by meaning."""

    @abstractmethod
    async def search(
        self, query: str, filters: SearchFilters | None = None
    ) -> list[SearchHit]: ...


class TermOverlapSemanticSearch(Service):
    """Term-overlap stand-in for vector similarity.

    Only resources with an embedding are candidates, but the embedding is
    never compared; it only earns a flat bonus.
    """

    store: SearchStore
    topics: TopicActivityService

    async def search(self, query: str, filters: SearchFilters | None = None) -> list[SearchHit]:
        terms = query_terms(query)
        if not terms:
            return []

        try:
            candidates = await self.store.find_semantic_candidates(filters or SearchFilters())
        except InfrastructureError as e:
            raise UpstreamFailureError(f"Semantic candidate lookup failed: {e.message}") from e
        if not candidates:
            return []

        visible = await self.topics.keep_active(candidates)
        hits = [
            SearchHit(resource=resource, score=score)
            for resource in visible
            if (score := self.score(resource, terms)) > 0
        ]
        hits.sort(key=lambda h: h.score, reverse=True)
        return hits

    @staticmethod
    def score(resource: Resource, terms: list[str]) -> float:
        content = " ".join(
            (
                resource.title,
                resource.description,
                " ".join(resource.tags),
                " ".join(resource.themes),
            )
        ).lower()
        score = 0.0
        for term in terms:
            score += content.count(term) * TERM_INCREMENT
        if resource.has_embedding:
            score += EMBEDDING_BONUS
        return min(score, MAX_SCORE)
