"""
Candidate-pool sources.

FixtureMarketplace
    Demo marketplace that synthesises listings with 1–3 tags from a fixed
    vocabulary.  Real marketplace APIs (Hyperspace, Clutchy, listed-object RPC
    queries) would slot in behind the same ``fetch_candidates(limit)`` method.
    A ``seed`` makes the generated pool reproducible.

FileAssetSource
    Reads a JSON array of asset records from disk.  Serves as either an
    ownership source or a candidate source, which makes offline runs and
    fixtures easy::

        [{"object_id": "0x1", "name": "Fren #1", "collection": "frens",
          "traits": {"hat": "red"}, "price": 12.5}]
"""

from __future__ import annotations

import json
import logging
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import ClassVar, Optional

from pydantic import TypeAdapter, ValidationError

from trait_affinity.ingestion.errors import CandidatePoolError, OwnershipLookupError
from trait_affinity.models.asset import Asset

logger = logging.getLogger(__name__)

_ASSET_LIST = TypeAdapter(list[Asset])


class FixtureMarketplace:
    """Synthetic listing generator.

    Attributes:
        seed: Seed for the private RNG; ``None`` for a fresh random pool.
    """

    TRAIT_VOCABULARY: ClassVar[tuple[str, ...]] = (
        "hat_red", "hat_blue", "hat_green",
        "eyes_blue", "eyes_green", "eyes_brown",
        "color_red", "color_blue",
        "rarity_rare", "rarity_epic",
    )
    COLLECTIONS: ClassVar[tuple[str, ...]] = ("frens", "capsule", "generic")

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def fetch_candidates(self, limit: int = 50) -> list[Asset]:
        """Generate ``limit`` listings.

        Raises:
            CandidatePoolError: If ``limit`` is negative.
        """
        if limit < 0:
            raise CandidatePoolError(f"limit must be non-negative, got {limit}")

        logger.info("Generating %d fixture marketplace candidates (seed=%s)", limit, self.seed)

        listed_at = datetime.now(timezone.utc)
        candidates: list[Asset] = []
        for i in range(limit):
            n_traits = self._rng.randint(1, 3)
            selected = self._rng.sample(self.TRAIT_VOCABULARY, n_traits)
            candidates.append(
                Asset(
                    object_id=f"0x{self._rng.getrandbits(64):016x}",
                    name=f"Candidate NFT #{i + 1}",
                    collection=self._rng.choice(self.COLLECTIONS),
                    description=f"Sample marketplace NFT {i + 1}",
                    image_url="/placeholder.svg?width=200&height=200&query=nft",
                    traits={trait: "true" for trait in selected},
                    price=round(self._rng.random() * 1000 + 10, 2),
                    listed_at=listed_at,
                )
            )
        return candidates


class FileAssetSource:
    """Loads assets from a JSON file (array of asset records)."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> list[Asset]:
        with self.path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        return _ASSET_LIST.validate_python(raw)

    def fetch_owned_assets(self, holder_id: str) -> list[Asset]:
        """Return every asset in the file; ``holder_id`` is only used in errors."""
        try:
            assets = self._load()
        except (OSError, ValueError, ValidationError) as exc:
            raise OwnershipLookupError(holder_id, f"cannot read {self.path}: {exc}") from exc
        logger.info("Loaded %d owned assets from %s", len(assets), self.path)
        return assets

    def fetch_candidates(self, limit: int = 50) -> list[Asset]:
        """Return the first ``limit`` assets in the file."""
        if limit < 0:
            raise CandidatePoolError(f"limit must be non-negative, got {limit}")
        try:
            assets = self._load()
        except (OSError, ValueError, ValidationError) as exc:
            raise CandidatePoolError(f"cannot read {self.path}: {exc}") from exc
        logger.info("Loaded %d candidates from %s (limit=%d)", len(assets), self.path, limit)
        return assets[:limit]
