"""
Shared pytest fixtures for the Trait Affinity test suite.

Provides:
  - ``make_asset``: factory for ``Asset`` objects with sensible defaults.
  - ``red_holder_assets``: three owned assets that all normalize to
    ``color_red`` (plus a unique ``serial_*`` tag each).
  - ``red_profile``: profile built from ``red_holder_assets``.
  - ``app_config``: default ``AppConfig`` (no files or env involved).
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import pytest

from trait_affinity.config import AppConfig
from trait_affinity.models.asset import Asset
from trait_affinity.models.profile import TasteProfile
from trait_affinity.profile.builder import build_profile

HOLDER = "0xholder000000000000000000000000000000000000000000000000000000001"


def _asset(
    object_id: str = "0x1",
    name: Optional[str] = None,
    collection: Optional[str] = "generic",
    traits: Optional[dict[str, Any]] = None,
    price: Optional[float] = None,
    description: Optional[str] = None,
) -> Asset:
    return Asset(
        object_id=object_id,
        name=name,
        collection=collection,
        description=description,
        traits=traits or {},
        price=price,
    )


@pytest.fixture
def make_asset() -> Callable[..., Asset]:
    """Factory fixture returning ``Asset`` objects (no name / description by default)."""
    return _asset


@pytest.fixture
def red_holder_assets() -> list[Asset]:
    return [
        _asset(object_id=f"0xowned{i}", traits={"color": "red", "serial": i})
        for i in range(3)
    ]


@pytest.fixture
def red_profile(red_holder_assets: list[Asset]) -> TasteProfile:
    return build_profile(HOLDER, red_holder_assets, top_k=1)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()
