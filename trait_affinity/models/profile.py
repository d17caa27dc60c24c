"""
Taste profile model.

A ``TasteProfile`` is derived data: it is rebuilt from a holder's full asset
set on every call and is frozen once built, so one instance can be shared
read-only across any number of scoring calls.

``trait_counts`` keys are composite tags (``<attribute>_<value>``) in the
order they were first seen; ``top_traits`` is the stable top-K by count.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TraitCount(BaseModel):
    """A composite trait tag and how many owned assets carry it."""

    model_config = ConfigDict(frozen=True)

    trait: str
    count: int

    @field_validator("count")
    @classmethod
    def validate_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"count must be >= 1, got {v}.")
        return v


class TasteProfile(BaseModel):
    """Aggregate trait frequencies for one holder.

    Attributes:
        holder_id: Wallet address (or any opaque holder identifier).
        total_assets: Number of owned assets the profile was built from.
        trait_counts: Composite tag -> number of owned assets carrying it.
        top_traits: Top-K tags by descending count, ties in first-seen order.
    """

    model_config = ConfigDict(frozen=True)

    holder_id: str
    total_assets: int = 0
    trait_counts: dict[str, int] = Field(default_factory=dict)
    top_traits: list[TraitCount] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_profile_consistency(self) -> "TasteProfile":
        if self.total_assets < 0:
            raise ValueError("total_assets must be non-negative.")
        if len(self.top_traits) > len(self.trait_counts):
            raise ValueError("top_traits cannot be longer than trait_counts.")
        for tc in self.top_traits:
            if self.trait_counts.get(tc.trait) != tc.count:
                raise ValueError(
                    f"top trait '{tc.trait}' does not match trait_counts."
                )
        return self

    @property
    def is_empty(self) -> bool:
        """``True`` when no owned assets backed this profile."""
        return self.total_assets == 0

    @property
    def top_trait_keys(self) -> frozenset[str]:
        return frozenset(tc.trait for tc in self.top_traits)
