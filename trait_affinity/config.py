"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local secrets and env overrides (gitignored)
  4. Environment variables        — ``TRAIT_AFFINITY_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The CLI and ``RecommendationPipeline`` receive an ``AppConfig`` instance;
the pure scoring functions receive plain arguments built from it.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from trait_affinity.ingestion.sui_client import DEFAULT_RPC_URLS

# ── Sub-config models ─────────────────────────────────────────────────────────


class ScoringConfig(BaseModel):
    """Profile and scoring parameters.

    ``trait_weight`` and ``top_trait_bonus`` are tunable; the defaults
    reproduce the established ranking exactly.
    """

    model_config = ConfigDict(frozen=True)

    top_k: int = 10
    top_n: int = 5
    trait_weight: float = 5.0
    top_trait_bonus: float = 10.0

    @field_validator("top_k")
    @classmethod
    def validate_top_k(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"top_k must be >= 1, got {v}.")
        return v

    @field_validator("top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"top_n must be >= 0, got {v}.")
        return v

    @field_validator("trait_weight", "top_trait_bonus")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"Scoring weights must be non-negative, got {v}.")
        return v


class ChainConfig(BaseModel):
    """Sui full-node connection settings."""

    model_config = ConfigDict(frozen=True)

    network: str = "testnet"
    rpc_url: Optional[str] = None
    page_limit: int = 50
    max_pages: int = 10
    timeout_seconds: float = 30.0

    @field_validator("network")
    @classmethod
    def validate_network(cls, v: str) -> str:
        v = v.lower()
        if v not in DEFAULT_RPC_URLS:
            raise ValueError(
                f"Unknown network '{v}'. Must be one of {sorted(DEFAULT_RPC_URLS)}."
            )
        return v

    @property
    def resolved_rpc_url(self) -> str:
        """Explicit ``rpc_url`` if set, otherwise the network's public full node."""
        return self.rpc_url or DEFAULT_RPC_URLS[self.network]


class CandidatesConfig(BaseModel):
    """Candidate pool settings."""

    model_config = ConfigDict(frozen=True)

    pool_limit: int = 50
    source: Literal["fixture", "file"] = "fixture"
    file_path: Optional[str] = None
    seed: Optional[int] = None

    @field_validator("pool_limit")
    @classmethod
    def validate_pool_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"pool_limit must be >= 0, got {v}.")
        return v


class OutputConfig(BaseModel):
    """Report output locations."""

    model_config = ConfigDict(frozen=True)

    report_dir: str = "data/outputs/recommendations"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth."""

    model_config = ConfigDict(frozen=True)

    scoring: ScoringConfig = ScoringConfig()
    chain: ChainConfig = ChainConfig()
    candidates: CandidatesConfig = CandidatesConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file is
            absent, built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml(default_path)
            config_dir = default_path.parent
        else:
            config_dir = None
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw = _read_toml(config_path)
        config_dir = config_path.parent

    # Also merge local.toml if present (gitignored local overrides)
    if config_dir is not None:
        local_config_path = config_dir / "local.toml"
        if local_config_path.exists():
            raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply TRAIT_AFFINITY_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return AppConfig.model_validate(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply TRAIT_AFFINITY_* env vars to the raw config dict.

    Supported overrides:
      TRAIT_AFFINITY_RPC_URL     → raw["chain"]["rpc_url"]
      TRAIT_AFFINITY_NETWORK     → raw["chain"]["network"]
      TRAIT_AFFINITY_POOL_LIMIT  → raw["candidates"]["pool_limit"]
      TRAIT_AFFINITY_LOG_LEVEL   → raw["logging"]["level"]
      TRAIT_AFFINITY_DEBUG       → raw["debug"]
    """
    if rpc_url := os.environ.get("TRAIT_AFFINITY_RPC_URL"):
        raw.setdefault("chain", {})["rpc_url"] = rpc_url

    if network := os.environ.get("TRAIT_AFFINITY_NETWORK"):
        raw.setdefault("chain", {})["network"] = network

    if pool_limit := os.environ.get("TRAIT_AFFINITY_POOL_LIMIT"):
        raw.setdefault("candidates", {})["pool_limit"] = pool_limit

    if log_level := os.environ.get("TRAIT_AFFINITY_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("TRAIT_AFFINITY_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw
