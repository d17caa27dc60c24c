"""
Domain models: assets, taste profiles, and scored recommendations.

All models are frozen pydantic models.
"""

from trait_affinity.models.asset import Asset
from trait_affinity.models.profile import TasteProfile, TraitCount
from trait_affinity.models.recommendation import (
    MatchedTrait,
    RecommendationReport,
    ScoredCandidate,
)

__all__ = [
    "Asset",
    "MatchedTrait",
    "RecommendationReport",
    "ScoredCandidate",
    "TasteProfile",
    "TraitCount",
]
