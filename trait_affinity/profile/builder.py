"""
Taste profile builder.

Counts composite trait tags across every asset a holder owns:

    for asset in owned_assets:
        for attribute, value in normalize(asset):
            trait_counts[f"{attribute}_{value}"] += 1

``top_traits`` is a stable sort of ``trait_counts`` by descending count, so
ties keep the order in which tags were first seen, truncated to ``top_k``.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from trait_affinity.models.asset import Asset
from trait_affinity.models.profile import TasteProfile, TraitCount
from trait_affinity.traits.normalizer import TraitNormalizer, composite_tags, normalize_traits

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 10


def build_profile(
    holder_id:    str,
    owned_assets: Sequence[Asset],
    top_k:        int = DEFAULT_TOP_K,
    normalizer:   Optional[TraitNormalizer] = None,
) -> TasteProfile:
    """Build a taste profile from a holder's owned assets.

    Args:
        holder_id:    Wallet address or other holder identifier.
        owned_assets: Every asset the holder owns (may be empty).
        top_k:        Number of salient traits to keep (default 10).
        normalizer:   Strategy registry; the built-in one when ``None``.

    Returns:
        A frozen TasteProfile.  With no assets: ``total_assets == 0`` and
        empty ``trait_counts`` / ``top_traits``.
    """
    normalize = normalizer.normalize if normalizer is not None else normalize_traits

    logger.info(
        "Building taste profile for holder=%s (%d assets)",
        holder_id[:10], len(owned_assets),
    )

    trait_counts: dict[str, int] = {}
    for asset in owned_assets:
        for tag in composite_tags(normalize(asset)):
            trait_counts[tag] = trait_counts.get(tag, 0) + 1

    top_traits = select_top_traits(trait_counts, top_k)

    logger.info(
        "Top traits for holder=%s: %s",
        holder_id[:10],
        ", ".join(f"{tc.trait}({tc.count})" for tc in top_traits) or "none",
    )

    return TasteProfile(
        holder_id=holder_id,
        total_assets=len(owned_assets),
        trait_counts=trait_counts,
        top_traits=top_traits,
    )


def select_top_traits(trait_counts: dict[str, int], top_k: int) -> list[TraitCount]:
    """Return the ``top_k`` tags by count; ties keep insertion order."""
    if top_k <= 0:
        return []
    # sorted() is stable, so equal counts keep first-seen order.
    ranked = sorted(trait_counts.items(), key=lambda kv: -kv[1])
    return [TraitCount(trait=tag, count=count) for tag, count in ranked[:top_k]]
