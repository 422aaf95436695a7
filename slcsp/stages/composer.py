"""
Result composition: one output row per request-list entry, in request order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Mapping, Sequence

from slcsp.domain.models import SlcspRow, ZipResultIndex


def build_zip_result_index(
    zip_areas: Mapping[str, str], premiums: Mapping[str, Decimal]
) -> ZipResultIndex:
    """Zip code -> SLCSP, for zip codes whose rate area is priced."""
    return {
        zipcode: premiums[area] for zipcode, area in zip_areas.items() if area in premiums
    }


def compose_results(
    requested: Sequence[str],
    zip_areas: Mapping[str, str],
    premiums: Mapping[str, Decimal],
) -> List[SlcspRow]:
    """
    Join the request list against the resolved zip codes and the rate-area index.

    Rows are never dropped or reordered: duplicates in ``requested`` come out
    duplicated, and zip codes without a determinable SLCSP get an empty rate.
    """
    results = build_zip_result_index(zip_areas, premiums)
    return [SlcspRow(zipcode=zipcode, rate=results.get(zipcode)) for zipcode in requested]


__all__ = ["build_zip_result_index", "compose_results"]
