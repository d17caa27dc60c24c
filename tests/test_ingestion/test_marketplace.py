"""
Tests for trait_affinity/ingestion/marketplace.py.

What we test
------------
FixtureMarketplace.fetch_candidates():
  - Returns exactly ``limit`` listings; 0 -> [].
  - Each listing has 1–3 vocabulary traits set to "true", a known
    collection, a price in [10, 1010) and a listed_at timestamp.
  - Same seed -> same pool (ids, traits, prices).
  - Negative limit -> CandidatePoolError.

FileAssetSource:
  - Loads a JSON array into Assets; fetch_candidates truncates to limit.
  - Missing file / bad JSON / invalid records raise the protocol's error.
  - Satisfies both OwnershipSource and CandidateSource protocols.
"""

from __future__ import annotations

import json

import pytest

from trait_affinity.ingestion.errors import CandidatePoolError, OwnershipLookupError
from trait_affinity.ingestion.marketplace import FileAssetSource, FixtureMarketplace
from trait_affinity.ingestion.sources import CandidateSource, OwnershipSource


class TestFixtureMarketplace:
    def test_returns_limit(self):
        assert len(FixtureMarketplace(seed=1).fetch_candidates(12)) == 12

    def test_zero_limit(self):
        assert FixtureMarketplace(seed=1).fetch_candidates(0) == []

    def test_listing_shape(self):
        for asset in FixtureMarketplace(seed=3).fetch_candidates(40):
            assert 1 <= len(asset.traits) <= 3
            assert set(asset.traits) <= set(FixtureMarketplace.TRAIT_VOCABULARY)
            assert set(asset.traits.values()) == {"true"}
            assert asset.collection in FixtureMarketplace.COLLECTIONS
            assert asset.price is not None and 10 <= asset.price <= 1010
            assert asset.listed_at is not None
            assert asset.object_id.startswith("0x")

    def test_names_are_numbered(self):
        names = [a.name for a in FixtureMarketplace(seed=5).fetch_candidates(3)]
        assert names == ["Candidate NFT #1", "Candidate NFT #2", "Candidate NFT #3"]

    def test_seed_reproducible(self):
        first = FixtureMarketplace(seed=42).fetch_candidates(20)
        second = FixtureMarketplace(seed=42).fetch_candidates(20)
        assert [(a.object_id, a.traits, a.price, a.collection) for a in first] == [
            (a.object_id, a.traits, a.price, a.collection) for a in second
        ]

    def test_negative_limit(self):
        with pytest.raises(CandidatePoolError):
            FixtureMarketplace().fetch_candidates(-1)

    def test_satisfies_candidate_protocol(self):
        assert isinstance(FixtureMarketplace(), CandidateSource)


class TestFileAssetSource:
    @pytest.fixture
    def assets_file(self, tmp_path):
        path = tmp_path / "assets.json"
        path.write_text(
            json.dumps(
                [
                    {"object_id": "0x1", "collection": "frens", "name": "Fren Red Hat"},
                    {"object_id": "0x2", "traits": {"color": "red"}, "price": 12.5},
                    {"object_id": "0x3"},
                ]
            ),
            encoding="utf-8",
        )
        return path

    def test_fetch_owned(self, assets_file):
        assets = FileAssetSource(assets_file).fetch_owned_assets("0xholder")
        assert [a.object_id for a in assets] == ["0x1", "0x2", "0x3"]
        assert assets[1].traits == {"color": "red"}
        assert assets[1].price == 12.5

    def test_fetch_candidates_truncates(self, assets_file):
        assets = FileAssetSource(assets_file).fetch_candidates(2)
        assert [a.object_id for a in assets] == ["0x1", "0x2"]

    def test_missing_file_ownership(self, tmp_path):
        with pytest.raises(OwnershipLookupError):
            FileAssetSource(tmp_path / "nope.json").fetch_owned_assets("0xholder")

    def test_missing_file_candidates(self, tmp_path):
        with pytest.raises(CandidatePoolError):
            FileAssetSource(tmp_path / "nope.json").fetch_candidates(5)

    def test_bad_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CandidatePoolError):
            FileAssetSource(path).fetch_candidates(5)

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps([{"name": "no id"}]), encoding="utf-8")
        with pytest.raises(OwnershipLookupError):
            FileAssetSource(path).fetch_owned_assets("0xholder")

    def test_satisfies_both_protocols(self, assets_file):
        source = FileAssetSource(assets_file)
        assert isinstance(source, OwnershipSource)
        assert isinstance(source, CandidateSource)
