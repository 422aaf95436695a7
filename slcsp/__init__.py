"""
SLCSP Finder - second-lowest-cost Silver plan premiums by zip code.

For every zip code of a request list, this package finds the premium of the
second-lowest-cost Silver plan of the rate area the zip code belongs to:

- Rate-area aggregation of Silver plan premiums
- Zip-code resolution, discarding zip codes that span several rate areas
- Order-preserving composition of the results
- Atomic rewrite of the request file as `zipcode,rate`
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from slcsp.config import Settings, get_settings
from slcsp.domain.models import PlanRecord, SlcspRow, ZipAreaRecord
from slcsp.errors import (
    ConfigurationError,
    InputAccessError,
    MalformedRowError,
    OutputWriteError,
    SlcspError,
)
from slcsp.pipeline import PipelineResult, run_pipeline
from slcsp.stages import aggregate_premiums, compose_results, resolve_zips
from slcsp.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "PlanRecord",
    "SlcspRow",
    "ZipAreaRecord",
    # Stages
    "aggregate_premiums",
    "compose_results",
    "resolve_zips",
    # Pipeline
    "PipelineResult",
    "run_pipeline",
    # Errors
    "ConfigurationError",
    "InputAccessError",
    "MalformedRowError",
    "OutputWriteError",
    "SlcspError",
    # Logging
    "configure_logging",
    "get_logger",
]
