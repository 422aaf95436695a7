from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from slcsp.pipeline import PipelineResult

_COUNT_LABELS = {
    "requested": "Requested zip codes",
    "priced_rate_areas": "Rate areas with an SLCSP",
    "resolved_zips": "Zip codes resolved",
    "ambiguous_zips": "Zip codes in several priced rate areas",
    "unpriced_zips": "Zip codes only in unpriced rate areas",
    "rows_with_rate": "Rows with a rate",
    "rows_blank": "Rows left blank",
}


def print_summary(result: PipelineResult, console: Optional[Console] = None) -> None:
    """
    Render per-stage timings and outcome counts as rich tables.
    """
    console = console or Console(stderr=True)

    stages = Table(
        title="SLCSP Finder Stages",
        box=box.ROUNDED,
        caption=f"Output: {result.paths.output}",
    )
    stages.add_column("Stage", style="cyan", no_wrap=True)
    stages.add_column("Rows In", justify="right", style="magenta")
    stages.add_column("Rows Out", justify="right", style="magenta")
    stages.add_column("Duration (ms)", justify="right", style="green")
    stages.add_column("Peak Memory (MB)", justify="right", style="yellow")

    for stats in result.stages:
        rows_in = f"{stats.rows_in:,}" if stats.rows_in is not None else "-"
        rows_out = f"{stats.rows_out:,}" if stats.rows_out is not None else "-"
        mem_mb = (stats.peak_rss_bytes or 0) / (1024 * 1024)
        stages.add_row(stats.label, rows_in, rows_out, f"{stats.duration_ms:.1f}", f"{mem_mb:.2f}")

    counts = Table(box=box.SIMPLE, show_header=False)
    counts.add_column("Metric", style="cyan")
    counts.add_column("Value", justify="right", style="bold green")
    for key, value in result.counts.items():
        counts.add_row(_COUNT_LABELS.get(key, key), f"{value:,}")

    console.print(stages)
    console.print(counts)


__all__ = ["print_summary"]
