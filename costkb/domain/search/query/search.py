from pydantic import Field

from costkb.domain.search.model.value import (
    HybridWeights,
    SearchFilters,
    SearchHit,
    SearchPage,
    SortOrder,
)
from costkb.domain.search.service.search import DEFAULT_LIMIT, MAX_LIMIT, SearchService
from costkb.domain.shared.query import Query, QueryHandler, Result


class SearchResources(Query):
    query: str
    filters: SearchFilters = Field(default_factory=SearchFilters)
    sort: SortOrder = SortOrder.RELEVANCE
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    weights: HybridWeights | None = None


class SearchResults(Result):
    page: SearchPage


class SearchResourcesHandler(QueryHandler[SearchResources, SearchResults]):
    search_service: SearchService

    async def run(self, cmd: SearchResources) -> SearchResults:
        page = await self.search_service.search(
            cmd.query,
            cmd.filters,
            sort=cmd.sort,
            page=cmd.page,
            limit=cmd.limit,
            weights=cmd.weights,
        )
        return SearchResults(page=page)


class KeywordSearchResources(Query):
    query: str
    filters: SearchFilters = Field(default_factory=SearchFilters)
    sort: SortOrder = SortOrder.RELEVANCE
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1, le=MAX_LIMIT)


class SemanticSearchResources(Query):
    query: str
    filters: SearchFilters = Field(default_factory=SearchFilters)


class SearchHits(Result):
    results: list[SearchHit]


class KeywordSearchHandler(QueryHandler[KeywordSearchResources, SearchHits]):
    search_service: SearchService

    async def run(self, cmd: KeywordSearchResources) -> SearchHits:
        hits = await self.search_service.keyword_search(
            cmd.query, cmd.filters, cmd.sort, cmd.page, cmd.limit
        )
        return SearchHits(results=hits)


class SemanticSearchHandler(QueryHandler[SemanticSearchResources, SearchHits]):
    search_service: SearchService

    async def run(self, cmd: SemanticSearchResources) -> SearchHits:
        hits = await self.search_service.semantic_search(cmd.query, cmd.filters)
        return SearchHits(results=hits)
