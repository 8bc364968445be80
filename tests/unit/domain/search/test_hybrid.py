"""Unit tests for HybridSearch."""

import logging
from unittest.mock import AsyncMock

import pytest

from costkb.domain.search.model.value import Highlights, HybridWeights, SearchHit
from costkb.domain.search.strategy.hybrid import HybridSearch, merge_hits


def _hit(resource, score, highlights=None) -> SearchHit:
    return SearchHit(resource=resource, score=score, highlights=highlights)


def _make_hybrid(keyword_hits=None, semantic_hits=None, semantic_error=None) -> HybridSearch:
    keyword = AsyncMock()
    keyword.search.return_value = keyword_hits or []
    semantic = AsyncMock()
    if semantic_error is not None:
        semantic.search.side_effect = semantic_error
    else:
        semantic.search.return_value = semantic_hits or []
    return HybridSearch(keyword=keyword, semantic=semantic, weights=HybridWeights())


class TestMergeHits:
    def test_combines_scores_with_default_weights(self, make_resource):
        both = make_resource()
        merged = merge_hits([_hit(both, 10)], [_hit(both, 0.5)], HybridWeights())

        assert len(merged) == 1
        assert merged[0].score == pytest.approx(10 * 0.6 + 0.5 * 0.4)

    def test_single_strategy_keeps_weighted_contribution(self, make_resource):
        kw_only = make_resource()
        sem_only = make_resource()
        merged = merge_hits([_hit(kw_only, 2)], [_hit(sem_only, 1.0)], HybridWeights())

        scores = {h.resource.id: h.score for h in merged}
        assert scores[kw_only.id] == pytest.approx(1.2)
        assert scores[sem_only.id] == pytest.approx(0.4)

    def test_sorted_descending(self, make_resource):
        a, b, c = make_resource(), make_resource(), make_resource()
        merged = merge_hits([_hit(a, 1), _hit(b, 5)], [_hit(c, 1.0), _hit(a, 1.0)], HybridWeights())

        assert [h.resource.id for h in merged] == [b.id, a.id, c.id]

    def test_keeps_keyword_highlights(self, make_resource):
        resource = make_resource()
        highlights = Highlights(title=["match"])
        merged = merge_hits([_hit(resource, 1, highlights)], [_hit(resource, 0.3)], HybridWeights())

        assert merged[0].highlights == highlights

    def test_custom_weights(self, make_resource):
        resource = make_resource()
        merged = merge_hits(
            [_hit(resource, 4)], [_hit(resource, 0.5)], HybridWeights(keyword=0.5, semantic=2.0)
        )
        assert merged[0].score == pytest.approx(3.0)


class TestHybridSearch:
    @pytest.mark.asyncio
    async def test_runs_both_strategies(self, make_resource):
        resource = make_resource()
        hybrid = _make_hybrid([_hit(resource, 5)], [_hit(resource, 0.5)])

        hits = await hybrid.search("roads")

        assert hits[0].score == pytest.approx(3.2)
        hybrid.keyword.search.assert_awaited_once()
        hybrid.semantic.search.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_semantic_failure_falls_back_to_keyword(self, make_resource, caplog):
        resource = make_resource()
        keyword_hits = [_hit(resource, 5)]
        hybrid = _make_hybrid(keyword_hits, semantic_error=RuntimeError("vector store down"))

        with caplog.at_level(logging.WARNING):
            hits = await hybrid.search("roads")

        assert hits == keyword_hits
        assert "falling back" in caplog.text

    @pytest.mark.asyncio
    async def test_keyword_failure_propagates(self):
        hybrid = _make_hybrid()
        hybrid.keyword.search.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError, match="db down"):
            await hybrid.search("roads")
