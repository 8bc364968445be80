from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.search.model.value import (
    SearchFilters,
    SearchHit,
    SortOrder,
    TextWeights,
)
from costkb.domain.search.port.store import SearchStore
from costkb.domain.search.strategy.text import extract_highlights, query_terms, relevance
from costkb.domain.shared.service import Service
from costkb.domain.topic.service.activity import TopicActivityService


class KeywordSearch(Service):
    """Weighted full-text matching over published resources.

    Results are ordered by ``sort`` but the score reported on each hit is
    the resource's click count, not its text relevance.
    """

    store: SearchStore
    topics: TopicActivityService
    weights: TextWeights

    async def search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        sort: SortOrder = SortOrder.RELEVANCE,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[SearchHit]:
        terms = query_terms(query)
        if not terms:
            return []

        await self.store.ensure_text_index()
        matches = await self.store.find_text_matches(terms, filters or SearchFilters())
        ordered = self._sort(matches, terms, sort)

        # Over-fetch so the topic filter below can still fill a page.
        if page and limit:
            skip = (page - 1) * limit
            ordered = ordered[skip : skip + limit * 2]

        visible = await self.topics.keep_active(ordered)
        hits = [
            SearchHit(
                resource=resource,
                score=float(resource.clicks),
                highlights=extract_highlights(resource, terms),
            )
            for resource in visible
        ]
        return hits[:limit] if limit else hits

    def _sort(self, resources: list[Resource], terms: list[str], sort: SortOrder) -> list[Resource]:
        if sort == SortOrder.DATE:
            return sorted(resources, key=lambda r: r.publication_date, reverse=True)
        if sort == SortOrder.POPULARITY:
            return sorted(resources, key=lambda r: r.clicks, reverse=True)
        return sorted(resources, key=lambda r: relevance(r, terms, self.weights), reverse=True)
