"""
Scoring output models.

``ScoredCandidate`` is produced once per candidate by the scorer and returned
to the caller unchanged.  ``RecommendationReport`` bundles the ranked list
with the profile summary it was ranked against.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trait_affinity.models.profile import TraitCount


class MatchedTrait(BaseModel):
    """One composite tag a candidate shares with the profile."""

    model_config = ConfigDict(frozen=True)

    trait: str
    contribution: float


class ScoredCandidate(BaseModel):
    """A candidate asset with its affinity score and breakdown.

    Attributes:
        object_id: Candidate asset identifier.
        name: Display name (``"Unknown"`` when the asset has none).
        collection: Collection identifier (``"Unknown"`` when missing).
        score: Non-negative affinity score, unbounded above.
        matched_traits: Per-tag contributions, descending by contribution.
            The top-trait bonus is not attributed to any entry.
        price: Listing price passed through from the candidate.
    """

    model_config = ConfigDict(frozen=True)

    object_id: str
    name: str = "Unknown"
    collection: str = "Unknown"
    score: float = 0.0
    matched_traits: list[MatchedTrait] = Field(default_factory=list)
    price: Optional[float] = None

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"score must be non-negative, got {v}.")
        return v


class RecommendationReport(BaseModel):
    """Result of one end-to-end recommendation run for a holder."""

    model_config = ConfigDict(frozen=True)

    holder_id: str
    total_assets: int
    top_traits: list[TraitCount]
    recommendations: list[ScoredCandidate]
    generated_at: datetime
