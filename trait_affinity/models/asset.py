"""
Asset model — one collectible as handed to the ranking core.

Assets are constructed by the ingestion collaborators (Sui RPC client,
marketplace source, JSON files) and are never mutated afterwards.  ``traits``
holds raw, collection-specific metadata exactly as fetched; canonical trait
tags are derived from it by ``trait_affinity.traits.normalizer``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Asset(BaseModel):
    """A single on-chain collectible or marketplace listing.

    Attributes:
        object_id: Opaque identifier, unique within a holder's set or a pool.
        name: Display name, or ``None`` if the object has none.
        collection: Collection / Move type identifier used for strategy selection.
        description: Free-text description.
        image_url: Display image URL.
        traits: Raw metadata key/value pairs (heterogeneous per collection).
        price: Listing price; only set for marketplace candidates.
        listed_at: Listing timestamp; only set for marketplace candidates.
    """

    model_config = ConfigDict(frozen=True)

    object_id: str
    name: Optional[str] = None
    collection: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    traits: dict[str, Any] = Field(default_factory=dict)
    price: Optional[float] = None
    listed_at: Optional[datetime] = None

    @field_validator("object_id")
    @classmethod
    def validate_object_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("object_id must be a non-empty string.")
        return v

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError(f"price must be non-negative, got {v}.")
        return v

    def metadata_record(self) -> dict[str, Any]:
        """Flatten display fields and raw traits into one metadata mapping.

        Raw traits win over display fields on key collisions.
        """
        return {
            "name": self.name,
            "description": self.description,
            "image_url": self.image_url,
            **self.traits,
        }
