import asyncio
import logging
import math

from costkb.domain.search.model.value import (
    FacetField,
    Facets,
    HybridWeights,
    SearchFilters,
    SearchHit,
    SearchPage,
    SortOrder,
)
from costkb.domain.search.port.store import SearchStore
from costkb.domain.search.strategy.hybrid import HybridSearch
from costkb.domain.search.strategy.keyword import KeywordSearch
from costkb.domain.search.strategy.semantic import SemanticStrategy
from costkb.domain.shared.error import ValidationError
from costkb.domain.shared.service import Service

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class SearchService(Service):
    """Entry point of the ranking engine."""

    store: SearchStore
    hybrid: HybridSearch
    keyword: KeywordSearch
    semantic: SemanticStrategy

    async def search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        sort: SortOrder = SortOrder.RELEVANCE,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
        weights: HybridWeights | None = None,
    ) -> SearchPage:
        """Rank published resources for ``query`` and return one page.

        ``total`` counts every published resource matching ``filters`` and is
        independent of how many resources the strategies ranked. Facets
        describe the whole published catalog.
        """
        _check_paging(page, limit)
        if not query or not query.strip():
            return SearchPage(results=[], total=0, facets=Facets(), page=page, total_pages=0)

        filters = filters or SearchFilters()
        ranked = await self.hybrid.search(query, filters, weights, sort)
        total = await self.store.count_published(filters)

        skip = (page - 1) * limit
        results = ranked[skip : skip + limit]
        facets = await self.facets()

        logger.debug(
            "Search %r: %d ranked, %d total, page %d", query, len(ranked), total, page
        )
        return SearchPage(
            results=results,
            total=total,
            facets=facets,
            page=page,
            total_pages=math.ceil(total / limit),
        )

    async def keyword_search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        sort: SortOrder = SortOrder.RELEVANCE,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[SearchHit]:
        return await self.keyword.search(query, filters, sort, page, limit)

    async def semantic_search(
        self, query: str, filters: SearchFilters | None = None
    ) -> list[SearchHit]:
        return await self.semantic.search(query, filters)

    async def facets(self) -> Facets:
        resource_types, themes, country_programs, languages = await asyncio.gather(
            self.store.facet_counts(FacetField.RESOURCE_TYPE),
            self.store.facet_counts(FacetField.THEMES),
            self.store.facet_counts(FacetField.COUNTRY_PROGRAMS),
            self.store.facet_counts(FacetField.LANGUAGE),
        )
        return Facets(
            resource_types=resource_types,
            themes=themes,
            country_programs=country_programs,
            languages=languages,
        )

    async def ensure_text_index(self) -> None:
        await self.store.ensure_text_index()


def _check_paging(page: int, limit: int) -> None:
    if page < 1:
        raise ValidationError("page must be at least 1", field="page")
    if limit < 1:
        raise ValidationError("limit must be at least 1", field="limit")
