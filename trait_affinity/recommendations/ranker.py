"""
Recommendation ranker: scores a candidate pool and keeps the top N.

Ordering
--------
Candidates are sorted by score descending with a *stable* sort, so candidates
with equal scores keep their order from the input pool.  Identical inputs
therefore always produce identical output.

    rank_candidates(profile, pool, top_n=5)
    -> list[ScoredCandidate]   (len == min(top_n, len(pool)); [] when top_n <= 0)
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from trait_affinity.models.asset import Asset
from trait_affinity.models.profile import TasteProfile
from trait_affinity.models.recommendation import ScoredCandidate
from trait_affinity.recommendations.scorer import ScoringWeights, score_candidate
from trait_affinity.traits.normalizer import TraitNormalizer

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5


def rank_candidates(
    profile:    TasteProfile,
    candidates: Sequence[Asset],
    top_n:      int = DEFAULT_TOP_N,
    weights:    Optional[ScoringWeights] = None,
    normalizer: Optional[TraitNormalizer] = None,
) -> list[ScoredCandidate]:
    """Score every candidate and return the best ``top_n``.

    Args:
        profile:    Holder's taste profile.
        candidates: Candidate pool, in provider order.
        top_n:      Max results (default 5).  ``<= 0`` returns ``[]``.
        weights:    Scoring constants passed to ``score_candidate``.
        normalizer: Strategy registry passed to ``score_candidate``.

    Returns:
        ScoredCandidate list, score descending, ties in input order.
    """
    if top_n <= 0:
        return []

    logger.info(
        "Scoring %d candidates against profile of holder=%s",
        len(candidates), profile.holder_id[:10],
    )

    scored = [
        score_candidate(candidate, profile, weights=weights, normalizer=normalizer)
        for candidate in candidates
    ]
    ranked = sorted(scored, key=lambda sc: -sc.score)[:top_n]

    logger.info(
        "Top recommendations: %s",
        ", ".join(f"{sc.name}({sc.score:g})" for sc in ranked) or "none",
    )
    return ranked
