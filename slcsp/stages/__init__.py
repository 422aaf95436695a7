"""
Stages package for the SLCSP finder.

Re-exports the three pure stages (aggregate, resolve, compose) so downstream
code can import from `slcsp.stages` directly.
"""

from slcsp.stages.aggregator import SILVER, aggregate_premiums, second_lowest
from slcsp.stages.composer import build_zip_result_index, compose_results
from slcsp.stages.resolver import ZipResolution, resolve_zip_areas, resolve_zips

__all__ = [
    # Aggregation
    "SILVER",
    "aggregate_premiums",
    "second_lowest",
    # Resolution
    "ZipResolution",
    "resolve_zip_areas",
    "resolve_zips",
    # Composition
    "build_zip_result_index",
    "compose_results",
]
