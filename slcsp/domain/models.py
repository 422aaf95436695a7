"""
Domain models for the SLCSP finder.

Defines the immutable value types that flow between the stages: parsed plan
rows, zip-to-rate-area rows, and the output rows. Premiums are always
``Decimal`` values with two fractional digits so that equality (and therefore
deduplication by cost) is exact.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field

CENTS = Decimal("0.01")


class SourceRow(NamedTuple):
    """One CSV line as read from disk, kept with its origin for error reporting."""

    path: Path
    line_number: int
    fields: Tuple[str, ...]


# RateAreaKey -> second-lowest distinct Silver premium.
RateAreaPremiumIndex = Dict[str, Decimal]
# zip code -> premium of the single rate area it resolves to.
ZipResultIndex = Dict[str, Decimal]


def rate_area_key(state: str, rate_area: str) -> str:
    """Join state and rate-area number into the key shared by plans and zips."""
    return f"{state}{rate_area}"


def parse_premium(text: str) -> Decimal:
    """
    Parse a premium into a two-digit ``Decimal``.

    Raises ValueError for anything that is not a finite number.
    """
    try:
        value = Decimal(text.strip())
    except InvalidOperation as exc:
        raise ValueError(f"premium '{text}' is not a number") from exc
    if not value.is_finite():
        raise ValueError(f"premium '{text}' is not a finite number")
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"premium '{text}' is out of range") from exc


def format_premium(value: Optional[Decimal]) -> str:
    """Render a premium in fixed-point notation, or an empty string when absent."""
    if value is None:
        return ""
    return format(value.quantize(CENTS, rounding=ROUND_HALF_UP), "f")


class PlanRecord(BaseModel):
    """
    One plan row reduced to the fields the aggregation needs.
    """

    rate_area_key: str = Field(..., description="State + rate-area number, e.g. 'GA7'.")
    metal_level: str = Field(..., description="Metal tier as written in plans.csv.")
    premium: Decimal = Field(..., description="Monthly premium, two fractional digits.")

    model_config = {"frozen": True}


class ZipAreaRecord(BaseModel):
    """
    One (zip code, rate area) pair. Equal pairs hash equal, so county-level
    duplicates collapse when collected into a set.
    """

    zipcode: str = Field(..., description="Five-digit zip code as text.")
    rate_area_key: str = Field(..., description="State + rate-area number.")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.zipcode}:{self.rate_area_key}"


class SlcspRow(BaseModel):
    """
    One output row: a requested zip code and its SLCSP, if determinable.
    """

    zipcode: str
    rate: Optional[Decimal] = None

    model_config = {"frozen": True}

    def to_csv_fields(self) -> list[str]:
        return [self.zipcode, format_premium(self.rate)]


__all__ = [
    "CENTS",
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
