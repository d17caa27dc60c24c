"""
Recommendation report writer: JSON payload and CSV/JSON files.

All functions are pure formatting / file I/O; they consume an in-memory
``RecommendationReport`` and never touch a network source.

Output files
------------
  <output_dir>/
    recommendations_{holder[:10]}_{date}.json   -- full payload
    recommendations_{holder[:10]}_{date}.csv    -- one row per recommendation
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from trait_affinity.models.recommendation import RecommendationReport

logger = logging.getLogger(__name__)


def build_report_payload(report: RecommendationReport) -> dict[str, Any]:
    """Return the JSON-ready response payload for one report."""
    return {
        "success":   True,
        "holder_id": report.holder_id,
        "taste_profile": {
            "total_assets": report.total_assets,
            "top_traits": [tc.model_dump() for tc in report.top_traits],
        },
        "recommendations": [sc.model_dump() for sc in report.recommendations],
        "generated_at": report.generated_at.isoformat(),
    }


def _file_stem(report: RecommendationReport, run_date: date | None) -> str:
    if run_date is None:
        run_date = report.generated_at.date()
    return f"recommendations_{report.holder_id[:10]}_{run_date}"


def write_recommendation_json(
    report:     RecommendationReport,
    output_dir: Path,
    run_date:   date | None = None,
) -> Path:
    """Write the report payload as indented JSON.

    Args:
        report:     Report to serialise.
        output_dir: Target directory (created if missing).
        run_date:   Date label for the filename. Defaults to generated_at.

    Returns:
        Path to the written JSON file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"{_file_stem(report, run_date)}.json"

    with json_path.open("w", encoding="utf-8") as f:
        json.dump(build_report_payload(report), f, indent=2)

    logger.info(
        "Recommendation JSON written: %s (%d recommendations)",
        json_path, len(report.recommendations),
    )
    return json_path


def write_recommendation_csv(
    report:     RecommendationReport,
    output_dir: Path,
    run_date:   date | None = None,
) -> Path:
    """Write ranked recommendations to CSV.

    Columns: rank, object_id, name, collection, score, price, matched_traits.
    ``matched_traits`` is a ``;``-joined list of ``tag:contribution``.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"{_file_stem(report, run_date)}.csv"

    fieldnames = [
        "rank", "object_id", "name", "collection", "score", "price", "matched_traits",
    ]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for rank, sc in enumerate(report.recommendations, start=1):
            writer.writerow(
                {
                    "rank":           rank,
                    "object_id":      sc.object_id,
                    "name":           sc.name,
                    "collection":     sc.collection,
                    "score":          sc.score,
                    "price":          "" if sc.price is None else round(sc.price, 2),
                    "matched_traits": ";".join(
                        f"{m.trait}:{m.contribution:g}" for m in sc.matched_traits
                    ),
                }
            )

    logger.info("Recommendation CSV written: %s (%d rows)", csv_path, len(report.recommendations))
    return csv_path
