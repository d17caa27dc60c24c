"""
Trait Affinity Recommender.

Builds a taste profile from the assets a wallet holds and ranks candidate
assets by trait overlap with that profile.

Core entry points (pure, stateless)::

    from trait_affinity import build_profile, rank_candidates

    profile = build_profile(wallet, owned_assets, top_k=10)
    ranked  = rank_candidates(profile, candidate_pool, top_n=5)
"""

from trait_affinity.profile.builder import build_profile
from trait_affinity.recommendations.ranker import rank_candidates

__all__ = ["build_profile", "rank_candidates"]

__version__ = "0.1.0"
