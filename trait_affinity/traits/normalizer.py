"""
Attribute normalizer: maps an ``Asset`` to canonical lower-case traits.

Strategy selection
------------------
The normalizer keeps an ordered list of ``(matcher, strategy)`` pairs.  For an
asset whose lower-cased collection id is ``c``, the first pair with
``matcher in c`` wins; when none matches, the default strategy is used.
Assets without a collection are treated as collection ``"default"``.

Ordering is part of the contract: when several matchers could match
(``"capsule-frens"``), the earliest registered one is selected.

The normalizer never raises for bad metadata; a strategy that yields nothing
simply produces an empty mapping.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from trait_affinity.models.asset import Asset
from trait_affinity.traits.strategies import (
    BUILTIN_STRATEGIES,
    TraitStrategy,
    parse_default_traits,
)

logger = logging.getLogger(__name__)

_DEFAULT_COLLECTION_KEY = "default"


class TraitNormalizer:
    """Ordered strategy registry plus the normalization entry point.

    Usage::

        normalizer = TraitNormalizer()
        normalizer.register("suifrens", parse_frens_traits)
        traits = normalizer.normalize(asset)

    Attributes:
        default_strategy: Fallback used when no matcher hits.
    """

    def __init__(
        self,
        strategies: Optional[Iterable[tuple[str, TraitStrategy]]] = None,
        default_strategy: TraitStrategy = parse_default_traits,
    ) -> None:
        pairs = BUILTIN_STRATEGIES if strategies is None else strategies
        self._strategies: list[tuple[str, TraitStrategy]] = [
            (matcher.lower(), strategy) for matcher, strategy in pairs
        ]
        self.default_strategy = default_strategy

    @property
    def matchers(self) -> list[str]:
        return [matcher for matcher, _ in self._strategies]

    def register(self, matcher: str, strategy: TraitStrategy) -> None:
        """Append a strategy after all existing ones.

        Raises:
            ValueError: If ``matcher`` is empty (it would match everything).
        """
        if not matcher:
            raise ValueError("Strategy matcher must be a non-empty string.")
        self._strategies.append((matcher.lower(), strategy))

    def select(self, collection: Optional[str]) -> TraitStrategy:
        """Return the strategy for a collection id (first substring match)."""
        key = (collection or _DEFAULT_COLLECTION_KEY).lower()
        for matcher, strategy in self._strategies:
            if matcher in key:
                return strategy
        return self.default_strategy

    def normalize(self, asset: Asset) -> dict[str, str]:
        """Return the canonical attribute -> value mapping for one asset."""
        strategy = self.select(asset.collection)
        raw = strategy(asset.metadata_record())
        logger.debug(
            "Normalized %s (collection=%s) via %s: %d traits",
            asset.object_id, asset.collection, getattr(strategy, "__name__", strategy), len(raw),
        )
        return {str(k).lower(): str(v).lower() for k, v in raw.items()}


_BUILTIN_NORMALIZER = TraitNormalizer()


def normalize_traits(asset: Asset) -> dict[str, str]:
    """Normalize ``asset`` with the built-in strategy set."""
    return _BUILTIN_NORMALIZER.normalize(asset)


def composite_tags(traits: dict[str, str]) -> list[str]:
    """Join each (attribute, value) pair into one ``<attribute>_<value>`` tag.

    Distinct pairs can join to the same tag (``"a b": "c"`` and ``"a": "b_c"``
    both give ``a_b_c``); each tag is emitted once, in first-seen order.
    """
    return list(dict.fromkeys(f"{attribute}_{value}" for attribute, value in traits.items()))
