"""
Zip resolution: map each requested zip code to its single rate area.

A zip code may appear in zips.csv once per county it touches. Rows for rate
areas without an SLCSP are dropped first, then rows naming the same (zip, rate
area) pair collapse into one. A zip code left with more than one distinct priced
rate area is ambiguous and gets no rate area at all.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, FrozenSet, Iterable, Mapping, Set

from slcsp.domain.models import SourceRow, ZipAreaRecord, rate_area_key
from slcsp.errors import MalformedRowError
from slcsp.utils.logging import get_logger

log = get_logger(__name__)

# zipcode,state,county_code,name,rate_area
ZIP_FIELD_COUNT = 5


@dataclass(frozen=True)
class ZipResolution:
    """Outcome of resolving the requested zip codes."""

    resolved: Dict[str, str] = field(default_factory=dict)
    ambiguous: Dict[str, FrozenSet[str]] = field(default_factory=dict)
    unpriced: Dict[str, FrozenSet[str]] = field(default_factory=dict)


def zip_record_from_row(row: SourceRow) -> ZipAreaRecord:
    fields = row.fields
    if len(fields) < ZIP_FIELD_COUNT:
        raise MalformedRowError(
            row.path,
            row.line_number,
            fields,
            f"expected {ZIP_FIELD_COUNT} fields, found {len(fields)}",
        )
    zipcode, state, _county_code, _name, rate_area = fields[:ZIP_FIELD_COUNT]
    return ZipAreaRecord(zipcode=zipcode, rate_area_key=rate_area_key(state, rate_area))


def resolve_zip_areas(
    rows: Iterable[SourceRow],
    requested: Iterable[str],
    premiums: Mapping[str, Decimal],
) -> ZipResolution:
    """
    Resolve requested zip codes to rate areas, keeping track of what was dropped.

    Parameters
    ----------
    rows : iterable[SourceRow]
        Raw zips.csv rows, header included.
    requested : iterable[str]
        Zip codes of the request list; rows for other zip codes are ignored.
    premiums : mapping[str, Decimal]
        Rate area -> SLCSP index built by the aggregator.
    """
    wanted = set(requested)
    pairs: Set[ZipAreaRecord] = set()
    unpriced_areas: Dict[str, Set[str]] = defaultdict(set)
    for row in rows:
        record = zip_record_from_row(row)
        if record.zipcode not in wanted:
            continue
        if record.rate_area_key in premiums:
            pairs.add(record)
        else:
            unpriced_areas[record.zipcode].add(record.rate_area_key)

    areas_by_zip: Dict[str, Set[str]] = defaultdict(set)
    for record in pairs:
        areas_by_zip[record.zipcode].add(record.rate_area_key)

    resolution = ZipResolution()
    for zipcode, areas in unpriced_areas.items():
        if zipcode not in areas_by_zip:
            resolution.unpriced[zipcode] = frozenset(areas)
    for zipcode, areas in areas_by_zip.items():
        if len(areas) > 1:
            log.debug(
                f"Discarding zip {zipcode} spanning {len(areas)} rate areas",
                extra={"zipcode": zipcode, "rate_areas": sorted(areas)},
            )
            resolution.ambiguous[zipcode] = frozenset(areas)
            continue
        (area,) = areas
        resolution.resolved[zipcode] = area

    log.info(
        f"Resolved {len(resolution.resolved)} of {len(wanted)} requested zip codes",
        extra={
            "requested": len(wanted),
            "resolved": len(resolution.resolved),
            "ambiguous": len(resolution.ambiguous),
            "unpriced": len(resolution.unpriced),
        },
    )
    return resolution


def resolve_zips(
    rows: Iterable[SourceRow],
    requested: Iterable[str],
    premiums: Mapping[str, Decimal],
) -> Dict[str, str]:
    """Zip code -> rate area for every requested zip code with a determinable SLCSP."""
    return resolve_zip_areas(rows, requested, premiums).resolved


__all__ = [
    "ZIP_FIELD_COUNT",
    "ZipResolution",
    "resolve_zip_areas",
    "resolve_zips",
    "zip_record_from_row",
]
