"""
Domain package for the SLCSP finder.

Exports the value types shared by the aggregation, resolution and composition
stages. Keep this package focused on data definitions and validation concerns.
"""

from slcsp.domain.models import (
    PlanRecord,
    RateAreaPremiumIndex,
    SlcspRow,
    SourceRow,
    ZipAreaRecord,
    ZipResultIndex,
    format_premium,
    parse_premium,
    rate_area_key,
)

__all__ = [
    "PlanRecord",
    "RateAreaPremiumIndex",
    "SlcspRow",
    "SourceRow",
    "ZipAreaRecord",
    "ZipResultIndex",
    "format_premium",
    "parse_premium",
    "rate_area_key",
]
