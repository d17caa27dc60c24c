"""
RecommendationPipeline — holder id in, ranked recommendations out.

Flow
----
  1. Fetch the holder's owned assets from the injected OwnershipSource.
  2. Build a taste profile (``config.scoring.top_k`` salient traits).
  3. Refuse to rank when the holder owns nothing (InsufficientHoldingsError).
  4. Fetch ``config.candidates.pool_limit`` candidates from the CandidateSource.
  5. Rank with the configured weights and return a RecommendationReport.

Collaborator errors (OwnershipLookupError, CandidatePoolError) propagate to the
caller unchanged; the pipeline holds no state between runs.
"""

from __future__ import annotations

import logging
from typing import Optional

from trait_affinity.config import AppConfig
from trait_affinity.ingestion.sources import CandidateSource, OwnershipSource
from trait_affinity.models.profile import TasteProfile
from trait_affinity.models.recommendation import RecommendationReport
from trait_affinity.profile.builder import build_profile
from trait_affinity.recommendations.ranker import rank_candidates
from trait_affinity.recommendations.scorer import ScoringWeights
from trait_affinity.traits.normalizer import TraitNormalizer
from trait_affinity.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class InsufficientHoldingsError(RuntimeError):
    """Raised when a holder owns no assets, so there is no basis to recommend.

    Attributes:
        holder_id: Holder whose profile was empty.
    """

    def __init__(self, holder_id: str) -> None:
        self.holder_id = holder_id
        super().__init__(
            f"Holder '{holder_id}' owns no assets. Cannot generate recommendations."
        )


class RecommendationPipeline:
    """Wires the ownership and candidate collaborators to the ranking core.

    Attributes:
        config:           Application configuration.
        ownership_source: Supplies a holder's owned assets.
        candidate_source: Supplies the candidate pool.
        normalizer:       Strategy registry (built-in when ``None``).
    """

    def __init__(
        self,
        config:           AppConfig,
        ownership_source: OwnershipSource,
        candidate_source: CandidateSource,
        normalizer:       Optional[TraitNormalizer] = None,
    ) -> None:
        self.config           = config
        self.ownership_source = ownership_source
        self.candidate_source = candidate_source
        self.normalizer       = normalizer

    @property
    def weights(self) -> ScoringWeights:
        return ScoringWeights(
            trait_weight=self.config.scoring.trait_weight,
            top_trait_bonus=self.config.scoring.top_trait_bonus,
        )

    def build_profile(self, holder_id: str) -> TasteProfile:
        """Fetch holdings and build the taste profile (may be empty)."""
        _validate_holder_id(holder_id)
        owned = self.ownership_source.fetch_owned_assets(holder_id)
        return build_profile(
            holder_id,
            owned,
            top_k=self.config.scoring.top_k,
            normalizer=self.normalizer,
        )

    def run(self, holder_id: str, top_n: Optional[int] = None) -> RecommendationReport:
        """Generate recommendations for one holder.

        Args:
            holder_id: Wallet address / holder identifier.
            top_n:     Override for ``config.scoring.top_n``.

        Returns:
            RecommendationReport with profile summary and ranked candidates.

        Raises:
            ValueError:                If ``holder_id`` is empty.
            InsufficientHoldingsError: If the holder owns no assets.
            OwnershipLookupError:      Propagated from the ownership source.
            CandidatePoolError:        Propagated from the candidate source.
        """
        profile = self.build_profile(holder_id)
        if profile.is_empty:
            raise InsufficientHoldingsError(holder_id)

        candidates = self.candidate_source.fetch_candidates(
            self.config.candidates.pool_limit
        )
        n = self.config.scoring.top_n if top_n is None else top_n
        recommendations = rank_candidates(
            profile,
            candidates,
            top_n=n,
            weights=self.weights,
            normalizer=self.normalizer,
        )

        logger.info(
            "Generated %d recommendations for holder=%s from %d candidates",
            len(recommendations), holder_id[:10], len(candidates),
        )

        return RecommendationReport(
            holder_id=holder_id,
            total_assets=profile.total_assets,
            top_traits=profile.top_traits,
            recommendations=recommendations,
            generated_at=utcnow(),
        )


def _validate_holder_id(holder_id: str) -> None:
    if not isinstance(holder_id, str) or not holder_id.strip():
        raise ValueError("Invalid holder id: must be a non-empty string.")
