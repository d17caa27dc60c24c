"""
Candidate scoring: one candidate Asset against one TasteProfile.

Score formula (non-negative, unbounded above)
----------------------------------------------
    score = sum(trait_counts[tag] * trait_weight   for tag in matched)
          + top_trait_bonus * |matched ∩ top_traits|

Component explanations
----------------------
frequency term:
    Every composite tag of the candidate that the holder owns at least once
    contributes ``count * trait_weight`` (default 5).  Broad overlap with the
    holder's whole collection raises the score.

top-trait bonus:
    Each matched tag that is also one of the profile's top-K traits adds
    ``top_trait_bonus`` (default 10).  The bonus is profile-level: it is NOT
    added to any entry of ``matched_traits``, whose contributions stay purely
    proportional to raw frequency.

Worked example
--------------
    Profile: color_red x3 (top-K = [color_red]).
    Candidate with color_red: 3 * 5 + 1 * 10 = 25.
    Candidate with no shared tags: 0, empty breakdown.

The weights have no derivation beyond behavioural compatibility; both are
exposed through ``ScoringWeights`` / ``[scoring]`` config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from trait_affinity.models.asset import Asset
from trait_affinity.models.profile import TasteProfile
from trait_affinity.models.recommendation import MatchedTrait, ScoredCandidate
from trait_affinity.traits.normalizer import TraitNormalizer, composite_tags, normalize_traits

UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class ScoringWeights:
    """Tunable scoring constants.

    Attributes:
        trait_weight:    Points per owned occurrence of a matched tag.
        top_trait_bonus: Points per matched tag that is in the profile top-K.
    """

    trait_weight:    float = 5.0
    top_trait_bonus: float = 10.0

    def __post_init__(self) -> None:
        if self.trait_weight < 0 or self.top_trait_bonus < 0:
            raise ValueError("Scoring weights must be non-negative.")


DEFAULT_WEIGHTS = ScoringWeights()


def score_candidate(
    candidate:  Asset,
    profile:    TasteProfile,
    weights:    Optional[ScoringWeights] = None,
    normalizer: Optional[TraitNormalizer] = None,
) -> ScoredCandidate:
    """Score one candidate against a profile.

    Args:
        candidate:  Asset to evaluate.
        profile:    Holder's taste profile (read only).
        weights:    Scoring constants; ``DEFAULT_WEIGHTS`` when ``None``.
        normalizer: Strategy registry; the built-in one when ``None``.

    Returns:
        ScoredCandidate with total score and per-tag breakdown sorted by
        contribution descending.
    """
    weights   = weights or DEFAULT_WEIGHTS
    normalize = normalizer.normalize if normalizer is not None else normalize_traits

    score = 0.0
    matched: list[MatchedTrait] = []

    for tag in composite_tags(normalize(candidate)):
        count = profile.trait_counts.get(tag, 0)
        if count > 0:
            contribution = count * weights.trait_weight
            score += contribution
            matched.append(MatchedTrait(trait=tag, contribution=contribution))

    top_keys = profile.top_trait_keys
    top_matches = sum(1 for m in matched if m.trait in top_keys)
    score += top_matches * weights.top_trait_bonus

    return ScoredCandidate(
        object_id=candidate.object_id,
        name=candidate.name or UNKNOWN_LABEL,
        collection=candidate.collection or UNKNOWN_LABEL,
        score=score,
        matched_traits=sorted(matched, key=lambda m: -m.contribution),
        price=candidate.price,
    )
