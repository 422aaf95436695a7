"""
Pipeline for finding the SLCSP of every requested zip code and writing the results.

Usage (example from CLI):
    from slcsp.pipeline import run_pipeline

    result = run_pipeline(data_dir="data")
    print(result.counts)

Stages run strictly in sequence, each over fully materialized input:
load request list -> aggregate plans -> resolve zips -> compose -> write.
Any I/O or parse failure aborts the run before the output is touched.

When a results directory is given, a run summary is saved:
- `<results_dir>/latest.json` (last run)
- `<results_dir>/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from slcsp.config import InputPaths, Settings, get_settings
from slcsp.domain.models import RateAreaPremiumIndex, SlcspRow
from slcsp.infrastructure.csv_io import load_request_list, read_rows, write_results
from slcsp.stages.aggregator import aggregate_premiums
from slcsp.stages.composer import compose_results
from slcsp.stages.resolver import ZipResolution, resolve_zip_areas
from slcsp.utils.logging import get_logger
from slcsp.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)


@dataclass
class PipelineResult:
    """Everything a run produced, for reporting and tests."""

    paths: InputPaths
    rows: List[SlcspRow]
    premiums: RateAreaPremiumIndex
    resolution: ZipResolution
    stages: List[ProfileStats] = field(default_factory=list)

    @property
    def counts(self) -> Dict[str, int]:
        blank = sum(1 for row in self.rows if row.rate is None)
        return {
            "requested": len(self.rows),
            "priced_rate_areas": len(self.premiums),
            "resolved_zips": len(self.resolution.resolved),
            "ambiguous_zips": len(self.resolution.ambiguous),
            "unpriced_zips": len(self.resolution.unpriced),
            "rows_with_rate": len(self.rows) - blank,
            "rows_blank": blank,
        }

    def summary(self) -> Dict[str, Any]:
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_file": str(self.paths.request),
            "plans_file": str(self.paths.plans),
            "zips_file": str(self.paths.zips),
            "output_file": str(self.paths.output),
            "counts": self.counts,
            "stages": [stats.to_dict() for stats in self.stages],
        }


def _persist_summary(payload: dict, results_dir: Path) -> None:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    with latest_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    with archive_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Run summary persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})


def _log_stage(stats: ProfileStats) -> None:
    log.info(
        f"{stats.duration_ms:.0f}ms to {stats.label} ({stats.rows_out} rows out)",
        extra={
            "stage": stats.label,
            "rows_in": stats.rows_in,
            "rows_out": stats.rows_out,
            "duration_seconds": round(stats.duration_seconds, 6),
        },
    )


def run_pipeline(
    data_dir: Optional[Path | str] = None,
    output: Optional[Path | str] = None,
    results_dir: Optional[Path | str] = None,
    settings: Optional[Settings] = None,
    write: bool = True,
) -> PipelineResult:
    """
    Find the SLCSP for every zip code of the request list and write the results.

    Parameters
    ----------
    data_dir : Path | str | None
        Directory holding slcsp.csv, plans.csv and zips.csv. Defaults to
        settings.data_dir.
    output : Path | str | None
        Where to write the results. Defaults to the request file, which is
        replaced.
    results_dir : Path | str | None
        Directory for JSON run summaries. Defaults to settings.results_dir;
        nothing is persisted when both are unset.
    settings : Settings | None
        Explicit settings, mainly for tests. Defaults to get_settings().
    write : bool
        Whether to write the output file at all.

    Returns
    -------
    PipelineResult
        Output rows, intermediate indexes, counts and per-stage timings.
    """
    settings = settings or get_settings()
    paths = settings.resolve_paths(data_dir, output)
    stages: List[ProfileStats] = []

    log.info(f"[PIPELINE START] {paths.request.parent}", extra={"data_dir": str(paths.request.parent)})

    with profile_block("read input zipcodes") as stats:
        requested = load_request_list(paths.request)
        stats.rows_out = len(requested)
    stages.append(stats)
    _log_stage(stats)

    with profile_block("price rate areas") as stats:
        plan_rows = read_rows(paths.plans)
        stats.rows_in = len(plan_rows)
        premiums = aggregate_premiums(plan_rows, settings.metal_level)
        stats.rows_out = len(premiums)
    stages.append(stats)
    _log_stage(stats)

    with profile_block("resolve zipcodes") as stats:
        zip_rows = read_rows(paths.zips)
        stats.rows_in = len(zip_rows)
        resolution = resolve_zip_areas(zip_rows, requested, premiums)
        stats.rows_out = len(resolution.resolved)
    stages.append(stats)
    _log_stage(stats)

    with profile_block("compose results") as stats:
        rows = compose_results(requested, resolution.resolved, premiums)
        stats.rows_in = len(requested)
        stats.rows_out = len(rows)
    stages.append(stats)
    _log_stage(stats)

    if write:
        with profile_block("write output") as stats:
            stats.rows_in = len(rows)
            stats.rows_out = write_results(paths.output, rows)
        stages.append(stats)
        _log_stage(stats)

    result = PipelineResult(
        paths=paths,
        rows=rows,
        premiums=premiums,
        resolution=resolution,
        stages=stages,
    )

    summary_dir = results_dir if results_dir is not None else settings.results_dir
    if summary_dir is not None:
        _persist_summary(result.summary(), Path(summary_dir))

    log.info(
        f"[PIPELINE COMPLETE] {len(rows)} rows written to {paths.output}"
        if write
        else f"[PIPELINE COMPLETE] {len(rows)} rows computed",
        extra=result.counts,
    )
    return result


__all__ = ["PipelineResult", "run_pipeline"]
