"""
Collaborator interfaces consumed by the recommendation pipeline.

Any object with the right method satisfies these protocols; the pipeline
never checks concrete types.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from trait_affinity.models.asset import Asset


@runtime_checkable
class OwnershipSource(Protocol):
    """Returns every asset a holder owns.

    Raises ``OwnershipLookupError`` on failure.
    """

    def fetch_owned_assets(self, holder_id: str) -> list[Asset]: ...


@runtime_checkable
class CandidateSource(Protocol):
    """Returns at most ``limit`` candidate assets.

    Raises ``CandidatePoolError`` on failure.
    """

    def fetch_candidates(self, limit: int) -> list[Asset]: ...
