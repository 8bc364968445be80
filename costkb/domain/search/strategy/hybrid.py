import asyncio
import logging

from costkb.domain.search.model.value import HybridWeights, SearchFilters, SearchHit, SortOrder
from costkb.domain.search.strategy.keyword import KeywordSearch
from costkb.domain.search.strategy.semantic import SemanticStrategy
from costkb.domain.shared.service import Service

logger = logging.getLogger(__name__)


class HybridSearch(Service):
    """Runs keyword and semantic ranking concurrently and blends the scores."""

    keyword: KeywordSearch
    semantic: SemanticStrategy
    weights: HybridWeights

    async def search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        weights: HybridWeights | None = None,
        sort: SortOrder = SortOrder.RELEVANCE,
    ) -> list[SearchHit]:
        weights = weights or self.weights
        keyword_hits, semantic_hits = await asyncio.gather(
            self.keyword.search(query, filters, sort),
            self.semantic.search(query, filters),
            return_exceptions=True,
        )
        if isinstance(keyword_hits, BaseException):
            raise keyword_hits
        if isinstance(semantic_hits, BaseException):
            if not isinstance(semantic_hits, Exception):
                raise semantic_hits
            logger.warning(
                "Semantic search failed, falling back to keyword results: %s", semantic_hits
            )
            return keyword_hits

        return merge_hits(keyword_hits, semantic_hits, weights)


def merge_hits(
    keyword_hits: list[SearchHit],
    semantic_hits: list[SearchHit],
    weights: HybridWeights,
) -> list[SearchHit]:
    """Combine by resource id as ``keyword * Wk + semantic * Ws``.

    A resource found by only one strategy keeps its single weighted score.
    Keyword highlights are kept.
    """
    merged: dict[str, SearchHit] = {}
    for hit in keyword_hits:
        merged[hit.resource.id] = hit.model_copy(update={"score": hit.score * weights.keyword})
    for hit in semantic_hits:
        contribution = hit.score * weights.semantic
        existing = merged.get(hit.resource.id)
        if existing is None:
            merged[hit.resource.id] = hit.model_copy(update={"score": contribution})
        else:
            merged[hit.resource.id] = existing.model_copy(
                update={"score": existing.score + contribution}
            )
    return sorted(merged.values(), key=lambda h: h.score, reverse=True)
