"""
Stage profiling utilities for the SLCSP finder.

Measures each pipeline stage:
- Wall-clock time (perf_counter)
- Resident memory (RSS via psutil) before and after the stage
- Row counts consumed and produced, filled in by the stage itself

Usage example:
    from slcsp.utils.profiler import profile_block

    with profile_block("aggregate") as stats:
        index = aggregate_premiums(records)
        stats.rows_out = len(index)

    print(stats.duration_seconds, stats.peak_rss_bytes)
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for one stage's measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    peak_rss_bytes: Optional[int] = field(default=None)
    rows_in: Optional[int] = field(default=None)
    rows_out: Optional[int] = field(default=None)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        return self.duration_seconds * 1000.0

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["duration_seconds"] = round(self.duration_seconds, 6)
        return payload


def _current_rss(process: Optional[psutil.Process]) -> Optional[int]:
    if process is None:
        return None
    try:
        return process.memory_info().rss
    except psutil.Error:
        return None


@contextlib.contextmanager
def profile_block(label: str) -> Generator[ProfileStats, None, None]:
    """
    Context manager to time a block of code and record its memory footprint.

    The stats are finalized even when the block raises, so a failing stage
    still reports how long it ran before the error propagates.
    """
    stats = ProfileStats(label=label)
    try:
        process: Optional[psutil.Process] = psutil.Process()
    except psutil.Error:
        process = None

    rss_before = _current_rss(process)
    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts

        rss_after = _current_rss(process)
        samples = [value for value in (rss_before, rss_after) if value]
        stats.peak_rss_bytes = max(samples) if samples else None


__all__ = ["ProfileStats", "profile_block"]
