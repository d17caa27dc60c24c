"""
Tests for trait_affinity/config.py.

What we test
------------
AppConfig defaults:
  - Scoring defaults (top_k 10, top_n 5, weights 5 / 10).
  - Network default resolves to the public testnet full node.

Validation:
  - top_k < 1, negative weights, unknown network, bad log level rejected.

load_config():
  - Explicit TOML file is parsed; sibling local.toml deep-merges on top.
  - Missing explicit file -> FileNotFoundError.
  - TRAIT_AFFINITY_* env vars override file values.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from trait_affinity.config import (
    AppConfig,
    ChainConfig,
    LoggingConfig,
    ScoringConfig,
    load_config,
)
from trait_affinity.ingestion.sui_client import DEFAULT_RPC_URLS

_ENV_VARS = (
    "TRAIT_AFFINITY_RPC_URL",
    "TRAIT_AFFINITY_NETWORK",
    "TRAIT_AFFINITY_POOL_LIMIT",
    "TRAIT_AFFINITY_LOG_LEVEL",
    "TRAIT_AFFINITY_DEBUG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_scoring_defaults(self):
        cfg = AppConfig()
        assert cfg.scoring.top_k == 10
        assert cfg.scoring.top_n == 5
        assert cfg.scoring.trait_weight == 5.0
        assert cfg.scoring.top_trait_bonus == 10.0

    def test_rpc_url_resolution(self):
        assert ChainConfig().resolved_rpc_url == DEFAULT_RPC_URLS["testnet"]
        assert ChainConfig(network="MAINNET").resolved_rpc_url == DEFAULT_RPC_URLS["mainnet"]
        assert ChainConfig(rpc_url="http://localhost:9000").resolved_rpc_url == "http://localhost:9000"


class TestValidation:
    def test_top_k_must_be_positive(self):
        with pytest.raises(ValidationError):
            ScoringConfig(top_k=0)

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            ScoringConfig(top_trait_bonus=-1)

    def test_unknown_network(self):
        with pytest.raises(ValidationError):
            ChainConfig(network="moonnet")

    def test_log_level_normalised(self):
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(ValidationError):
            LoggingConfig(level="chatty")


class TestLoadConfig:
    def test_explicit_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(
            '[scoring]\ntop_n = 3\n\n[chain]\nnetwork = "devnet"\n',
            encoding="utf-8",
        )
        cfg = load_config(path)
        assert cfg.scoring.top_n == 3
        assert cfg.scoring.top_k == 10
        assert cfg.chain.network == "devnet"

    def test_local_toml_merges(self, tmp_path):
        path = tmp_path / "default.toml"
        path.write_text("[scoring]\ntop_n = 3\ntop_k = 7\n", encoding="utf-8")
        (tmp_path / "local.toml").write_text("[scoring]\ntop_n = 9\n", encoding="utf-8")
        cfg = load_config(path)
        assert cfg.scoring.top_n == 9
        assert cfg.scoring.top_k == 7

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[scoring]\ntop_k = 0\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "default.toml"
        path.write_text('[logging]\nlevel = "INFO"\n', encoding="utf-8")
        monkeypatch.setenv("TRAIT_AFFINITY_LOG_LEVEL", "warning")
        monkeypatch.setenv("TRAIT_AFFINITY_POOL_LIMIT", "7")
        monkeypatch.setenv("TRAIT_AFFINITY_RPC_URL", "http://node:9000")
        monkeypatch.setenv("TRAIT_AFFINITY_DEBUG", "yes")
        cfg = load_config(path)
        assert cfg.logging.level == "WARNING"
        assert cfg.candidates.pool_limit == 7
        assert cfg.chain.resolved_rpc_url == "http://node:9000"
        assert cfg.debug is True
