from dishka import provide

from costkb.config import Config
from costkb.domain.search.model.value import HybridWeights, TextWeights
from costkb.domain.search.query.search import (
    KeywordSearchHandler,
    SearchResourcesHandler,
    SemanticSearchHandler,
)
from costkb.domain.search.service.search import SearchService
from costkb.domain.search.strategy.hybrid import HybridSearch
from costkb.domain.search.strategy.keyword import KeywordSearch
from costkb.domain.search.strategy.semantic import SemanticStrategy, TermOverlapSemanticSearch
from costkb.util.di.base import Provider
from costkb.util.di.scope import Scope


class SearchProvider(Provider):
    @provide(scope=Scope.APP)
    def get_text_weights(self, config: Config) -> TextWeights:
        return TextWeights(
            title=config.search.title_weight,
            description=config.search.description_weight,
            tags=config.search.tags_weight,
            themes=config.search.themes_weight,
        )

    @provide(scope=Scope.APP)
    def get_hybrid_weights(self, config: Config) -> HybridWeights:
        return HybridWeights(
            keyword=config.search.keyword_weight,
            semantic=config.search.semantic_weight,
        )

    # Strategies hold no per-request state
    keyword = provide(KeywordSearch, scope=Scope.APP)
    semantic = provide(TermOverlapSemanticSearch, scope=Scope.APP, provides=SemanticStrategy)
    hybrid = provide(HybridSearch, scope=Scope.APP)
    service = provide(SearchService, scope=Scope.APP)

    # Query Handlers
    search_handler = provide(SearchResourcesHandler, scope=Scope.UOW)
    keyword_handler = provide(KeywordSearchHandler, scope=Scope.UOW)
    semantic_handler = provide(SemanticSearchHandler, scope=Scope.UOW)
