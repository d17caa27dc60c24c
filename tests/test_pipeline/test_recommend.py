"""
Tests for trait_affinity/pipeline/recommend.py.

What we test
------------
RecommendationPipeline.run():
  - Builds the profile from the ownership source and ranks the pool.
  - Requests ``config.candidates.pool_limit`` candidates.
  - Honours config top_n / top_k and an explicit top_n override.
  - Uses configured scoring weights.
  - Empty holdings -> InsufficientHoldingsError, candidates never fetched.
  - Empty / blank holder id -> ValueError.
  - Collaborator errors propagate unchanged.
"""

from __future__ import annotations

import pytest

from trait_affinity.config import AppConfig, CandidatesConfig, ScoringConfig
from trait_affinity.ingestion.errors import CandidatePoolError, OwnershipLookupError
from trait_affinity.pipeline.recommend import InsufficientHoldingsError, RecommendationPipeline


class _StaticOwnership:
    def __init__(self, assets=None, error=None):
        self.assets = assets or []
        self.error = error
        self.calls: list[str] = []

    def fetch_owned_assets(self, holder_id):
        self.calls.append(holder_id)
        if self.error:
            raise self.error
        return list(self.assets)


class _StaticCandidates:
    def __init__(self, assets=None, error=None):
        self.assets = assets or []
        self.error = error
        self.limits: list[int] = []

    def fetch_candidates(self, limit):
        self.limits.append(limit)
        if self.error:
            raise self.error
        return list(self.assets)[:limit]


@pytest.fixture
def candidates(make_asset):
    return [
        make_asset(object_id="blue", traits={"color": "blue"}),
        make_asset(object_id="red", traits={"color": "red"}, price=15.0),
        make_asset(object_id="serial", traits={"serial": 2}),
    ]


class TestRecommendationPipeline:
    def test_end_to_end(self, app_config, red_holder_assets, candidates):
        ownership = _StaticOwnership(red_holder_assets)
        pool = _StaticCandidates(candidates)
        report = RecommendationPipeline(app_config, ownership, pool).run("0xholder")

        assert ownership.calls == ["0xholder"]
        assert pool.limits == [50]
        assert report.holder_id == "0xholder"
        assert report.total_assets == 3
        assert report.top_traits[0].trait == "color_red"
        assert [sc.object_id for sc in report.recommendations] == ["red", "serial", "blue"]
        # color_red x3 plus top-trait bonus
        assert report.recommendations[0].score == 25
        assert report.recommendations[0].price == 15.0
        assert report.generated_at.tzinfo is not None

    def test_top_n_from_config_and_override(self, red_holder_assets, candidates):
        config = AppConfig(scoring=ScoringConfig(top_n=1))
        pipeline = RecommendationPipeline(
            config, _StaticOwnership(red_holder_assets), _StaticCandidates(candidates)
        )
        assert len(pipeline.run("0xholder").recommendations) == 1
        assert len(pipeline.run("0xholder", top_n=3).recommendations) == 3
        assert pipeline.run("0xholder", top_n=0).recommendations == []

    def test_pool_limit_from_config(self, red_holder_assets, candidates):
        config = AppConfig(candidates=CandidatesConfig(pool_limit=2))
        pool = _StaticCandidates(candidates)
        report = RecommendationPipeline(config, _StaticOwnership(red_holder_assets), pool).run("0xh")
        assert pool.limits == [2]
        assert {sc.object_id for sc in report.recommendations} == {"blue", "red"}

    def test_configured_weights(self, red_holder_assets, candidates):
        config = AppConfig(scoring=ScoringConfig(trait_weight=1.0, top_trait_bonus=0.0))
        report = RecommendationPipeline(
            config, _StaticOwnership(red_holder_assets), _StaticCandidates(candidates)
        ).run("0xholder")
        assert report.recommendations[0].score == 3

    def test_top_k_from_config(self, red_holder_assets, candidates):
        config = AppConfig(scoring=ScoringConfig(top_k=4))
        pipeline = RecommendationPipeline(
            config, _StaticOwnership(red_holder_assets), _StaticCandidates(candidates)
        )
        assert len(pipeline.build_profile("0xholder").top_traits) == 4


class TestRecommendationPipelineErrors:
    def test_no_holdings(self, app_config, candidates):
        pool = _StaticCandidates(candidates)
        pipeline = RecommendationPipeline(app_config, _StaticOwnership([]), pool)
        with pytest.raises(InsufficientHoldingsError) as exc_info:
            pipeline.run("0xempty")
        assert exc_info.value.holder_id == "0xempty"
        assert pool.limits == []

    @pytest.mark.parametrize("holder", ["", "   "])
    def test_invalid_holder(self, app_config, holder):
        pipeline = RecommendationPipeline(app_config, _StaticOwnership(), _StaticCandidates())
        with pytest.raises(ValueError):
            pipeline.run(holder)

    def test_ownership_error_propagates(self, app_config):
        error = OwnershipLookupError("0xholder", "node unreachable")
        pipeline = RecommendationPipeline(
            app_config, _StaticOwnership(error=error), _StaticCandidates()
        )
        with pytest.raises(OwnershipLookupError) as exc_info:
            pipeline.run("0xholder")
        assert exc_info.value is error

    def test_candidate_error_propagates(self, app_config, red_holder_assets):
        pipeline = RecommendationPipeline(
            app_config,
            _StaticOwnership(red_holder_assets),
            _StaticCandidates(error=CandidatePoolError("marketplace down")),
        )
        with pytest.raises(CandidatePoolError):
            pipeline.run("0xholder")
