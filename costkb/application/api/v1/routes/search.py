"""Search API routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from costkb.domain.search.query.search import (
    KeywordSearchHandler,
    KeywordSearchResources,
    SearchHits,
    SearchResources,
    SearchResourcesHandler,
    SearchResults,
    SemanticSearchHandler,
    SemanticSearchResources,
)
from costkb.domain.search.model.value import SearchPage

router = APIRouter(prefix="/search", tags=["Search"], route_class=DishkaRoute)


@router.post("", response_model=SearchPage)
async def search(
    body: SearchResources,
    handler: FromDishka[SearchResourcesHandler],
) -> SearchPage:
    """Hybrid search with facets over published resources."""
    result: SearchResults = await handler.run(body)
    return result.page


@router.post("/keyword", response_model=SearchHits)
async def keyword_search(
    body: KeywordSearchResources,
    handler: FromDishka[KeywordSearchHandler],
) -> SearchHits:
    return await handler.run(body)


@router.post("/semantic", response_model=SearchHits)
async def semantic_search(
    body: SemanticSearchResources,
    handler: FromDishka[SemanticSearchHandler],
) -> SearchHits:
    return await handler.run(body)
