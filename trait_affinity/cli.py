"""
Trait Affinity Recommender — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Build the ownership / candidate collaborators.
  4. Execute (profile or recommendation run).
  5. Report result to stdout.

Install and run::

    pip install -e .
    trait-affinity --help
    trait-affinity validate-config
    trait-affinity profile 0xabc... --owned-file data/owned.json
    trait-affinity recommend 0xabc... --seed 7 --output-dir data/outputs
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="trait-affinity",
    help="Trait-based affinity recommender for wallet collectibles.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from trait_affinity.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from trait_affinity.utils.logging import configure_logging
    configure_logging(config.logging)


def _ownership_source(config, owned_file: Optional[str]):
    """File source when ``owned_file`` is given, otherwise the Sui RPC client."""
    from trait_affinity.ingestion.marketplace import FileAssetSource
    from trait_affinity.ingestion.sui_client import SuiClient

    if owned_file:
        return FileAssetSource(owned_file)
    return SuiClient(
        config.chain.resolved_rpc_url,
        page_limit=config.chain.page_limit,
        max_pages=config.chain.max_pages,
        timeout=config.chain.timeout_seconds,
    )


def _candidate_source(config, candidates_file: Optional[str], seed: Optional[int]):
    from trait_affinity.ingestion.marketplace import FileAssetSource, FixtureMarketplace

    path = candidates_file or (
        config.candidates.file_path if config.candidates.source == "file" else None
    )
    if path:
        return FileAssetSource(path)
    return FixtureMarketplace(seed=seed if seed is not None else config.candidates.seed)


def _close(source) -> None:
    close = getattr(source, "close", None)
    if callable(close):
        close()


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Network:          {config.chain.network}")
    typer.echo(f"  RPC URL:          {config.chain.resolved_rpc_url}")
    typer.echo(f"  Candidate source: {config.candidates.source}")
    typer.echo(f"  Pool limit:       {config.candidates.pool_limit}")
    typer.echo(f"  Top-K / Top-N:    {config.scoring.top_k} / {config.scoring.top_n}")
    typer.echo(
        f"  Weights:          trait={config.scoring.trait_weight:g} "
        f"top_bonus={config.scoring.top_trait_bonus:g}"
    )
    typer.echo(f"  Log level:        {config.logging.level}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("profile")
def profile(
    holder_id: str = typer.Argument(..., help="Wallet address to profile."),
    owned_file: Optional[str] = typer.Option(
        None,
        "--owned-file",
        help="JSON file of owned assets (skips the Sui RPC lookup).",
    ),
    top_k: Optional[int] = typer.Option(
        None,
        "--top-k",
        help="Override number of top traits (default from config).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Build and print the taste profile for a holder."""
    from trait_affinity.ingestion.errors import OwnershipLookupError
    from trait_affinity.profile.builder import build_profile

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    source = _ownership_source(config, owned_file)
    try:
        owned = source.fetch_owned_assets(holder_id)
    except OwnershipLookupError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    finally:
        _close(source)

    k = config.scoring.top_k if top_k is None else top_k
    result = build_profile(holder_id, owned, top_k=k)

    typer.echo(f"Holder:        {result.holder_id}")
    typer.echo(f"Total assets:  {result.total_assets}")
    typer.echo(f"Distinct tags: {len(result.trait_counts)}")
    if result.is_empty:
        typer.echo("[WARN] Holder owns no assets; no basis for recommendations.")
        return
    typer.echo("Top traits:")
    for rank, tc in enumerate(result.top_traits, start=1):
        typer.echo(f"  {rank:>2}. {tc.trait:<30} x{tc.count}")


@app.command("recommend")
def recommend(
    holder_id: str = typer.Argument(..., help="Wallet address to recommend for."),
    owned_file: Optional[str] = typer.Option(
        None,
        "--owned-file",
        help="JSON file of owned assets (skips the Sui RPC lookup).",
    ),
    candidates_file: Optional[str] = typer.Option(
        None,
        "--candidates-file",
        help="JSON file of candidate assets (default: fixture marketplace).",
    ),
    top_n: Optional[int] = typer.Option(
        None,
        "--top-n",
        help="Number of recommendations (default from config).",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for the fixture marketplace (reproducible pools).",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Write JSON + CSV reports to this directory (implies --save).",
    ),
    save: bool = typer.Option(
        False,
        "--save",
        help="Write JSON + CSV reports to [output] report_dir.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the full JSON payload instead of a table.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Rank candidate assets against a holder's taste profile."""
    from trait_affinity.ingestion.errors import CandidatePoolError, OwnershipLookupError
    from trait_affinity.pipeline.recommend import (
        InsufficientHoldingsError,
        RecommendationPipeline,
    )
    from trait_affinity.recommendations.reporter import (
        build_report_payload,
        write_recommendation_csv,
        write_recommendation_json,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    ownership = _ownership_source(config, owned_file)
    candidates = _candidate_source(config, candidates_file, seed)
    pipeline = RecommendationPipeline(config, ownership, candidates)

    try:
        report = pipeline.run(holder_id, top_n=top_n)
    except InsufficientHoldingsError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (OwnershipLookupError, CandidatePoolError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=2)
    finally:
        _close(ownership)

    if as_json:
        typer.echo(json.dumps(build_report_payload(report), indent=2))
    else:
        typer.echo(f"Holder: {report.holder_id}  ({report.total_assets} assets)")
        typer.echo(
            "Top traits: "
            + ", ".join(f"{tc.trait}({tc.count})" for tc in report.top_traits)
        )
        typer.echo("")
        for rank, sc in enumerate(report.recommendations, start=1):
            price = f"{sc.price:.2f}" if sc.price is not None else "-"
            traits = ", ".join(f"{m.trait}+{m.contribution:g}" for m in sc.matched_traits)
            typer.echo(
                f"  {rank:>2}. {sc.name:<24} {sc.collection:<12} "
                f"score={sc.score:<6g} price={price:<8} {traits}"
            )

    if save or output_dir:
        target = Path(output_dir or config.output.report_dir)
        json_path = write_recommendation_json(report, target)
        csv_path = write_recommendation_csv(report, target)
        if not as_json:
            typer.echo(f"  Reports: {json_path}, {csv_path}")

    if not as_json:
        typer.echo("[OK] Recommendations generated.")


if __name__ == "__main__":
    app()
