"""
Rate-area aggregation: second-lowest distinct Silver premium per rate area.

Plans are filtered to one metal level, grouped by rate area (state + rate-area
number), and deduplicated by premium. Two plans with the same cost count once,
so the "second lowest" is the second-smallest distinct cost. Rate areas with
fewer than two distinct costs have no SLCSP and are left out of the index.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, Optional, Set

from slcsp.domain.models import (
    PlanRecord,
    RateAreaPremiumIndex,
    SourceRow,
    parse_premium,
    rate_area_key,
)
from slcsp.errors import MalformedRowError
from slcsp.utils.logging import get_logger

log = get_logger(__name__)

SILVER = "Silver"

# plan_id,state,metal_level,rate,rate_area
PLAN_FIELD_COUNT = 5


def plan_record_from_row(row: SourceRow, metal_level: str = SILVER) -> Optional[PlanRecord]:
    """
    Turn a raw plans.csv row into a PlanRecord, or None when the tier does not match.

    The comparison is exact and case-sensitive, which also drops the header
    row. Only rows of the wanted tier have their premium parsed.
    """
    fields = row.fields
    if len(fields) < PLAN_FIELD_COUNT:
        raise MalformedRowError(
            row.path,
            row.line_number,
            fields,
            f"expected {PLAN_FIELD_COUNT} fields, found {len(fields)}",
        )

    _plan_id, state, level, rate, rate_area = fields[:PLAN_FIELD_COUNT]
    if level != metal_level:
        return None

    try:
        premium = parse_premium(rate)
    except ValueError as exc:
        raise MalformedRowError(row.path, row.line_number, fields, str(exc)) from exc

    return PlanRecord(
        rate_area_key=rate_area_key(state, rate_area),
        metal_level=level,
        premium=premium,
    )


def second_lowest(premiums: Iterable[Decimal]) -> Optional[Decimal]:
    """Second-smallest distinct value, or None when there are fewer than two."""
    distinct = sorted(set(premiums))
    if len(distinct) < 2:
        return None
    return distinct[1]


def group_premiums(records: Iterable[PlanRecord]) -> Dict[str, Set[Decimal]]:
    """Distinct premiums per rate area."""
    grouped: Dict[str, Set[Decimal]] = defaultdict(set)
    for record in records:
        grouped[record.rate_area_key].add(record.premium)
    return dict(grouped)


def aggregate_premiums(
    rows: Iterable[SourceRow], metal_level: str = SILVER
) -> RateAreaPremiumIndex:
    """
    Build the rate area -> SLCSP index from raw plans.csv rows.

    Raises MalformedRowError on the first row with too few fields or a
    premium that is not a number; nothing is returned in that case.
    """
    records = []
    for row in rows:
        record = plan_record_from_row(row, metal_level)
        if record is not None:
            records.append(record)

    index: RateAreaPremiumIndex = {}
    skipped = 0
    for area, premiums in group_premiums(records).items():
        value = second_lowest(premiums)
        if value is None:
            skipped += 1
            log.debug(
                "No second-lowest premium for rate area",
                extra={"rate_area": area, "distinct_premiums": len(premiums)},
            )
            continue
        index[area] = value

    log.info(
        f"Priced {len(index)} rate areas from {len(records)} {metal_level} plans",
        extra={"plans": len(records), "rate_areas": len(index), "unpriced_rate_areas": skipped},
    )
    return index


__all__ = [
    "PLAN_FIELD_COUNT",
    "SILVER",
    "aggregate_premiums",
    "group_premiums",
    "plan_record_from_row",
    "second_lowest",
]
