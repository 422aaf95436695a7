from __future__ import annotations

from decimal import Decimal

import pytest

from slcsp.errors import MalformedRowError
from slcsp.stages.resolver import resolve_zip_areas, resolve_zips, zip_record_from_row

HEADER = "zipcode,state,county_code,name,rate_area"

PREMIUMS = {
    "GA7": Decimal("200.00"),
    "NY1": Decimal("310.50"),
    "NY2": Decimal("290.25"),
    "IL5": Decimal("250.00"),
}


def test_same_area_through_several_counties_resolves(make_rows):
    rows = make_rows([HEADER, "36749,GA,01001,CountyA,7", "36749,GA,02002,CountyB,7"])

    assert resolve_zips(rows, ["36749"], PREMIUMS) == {"36749": "GA7"}


def test_zip_in_two_rate_areas_is_excluded(make_rows):
    rows = make_rows([HEADER, "10001,NY,36061,New York,1", "10001,NY,36047,Kings,2"])

    resolution = resolve_zip_areas(rows, ["10001"], PREMIUMS)

    assert resolution.resolved == {}
    assert resolution.ambiguous == {"10001": frozenset({"NY1", "NY2"})}


def test_unpriced_rate_areas_are_dropped_before_grouping(make_rows):
    rows = make_rows(["54321,WI,55025,Dane,9", "54321,IL,17031,Cook,5"])

    resolution = resolve_zip_areas(rows, ["54321"], {"IL5": Decimal("250.00")})

    assert resolution.resolved == {"54321": "IL5"}
    assert resolution.ambiguous == {}
    assert resolution.unpriced == {}


def test_zip_in_several_unpriced_areas_is_unpriced_not_ambiguous(make_rows):
    rows = make_rows(["53703,WI,55025,Dane,9", "53703,MO,29095,Jackson,3"])

    resolution = resolve_zip_areas(rows, ["53703"], PREMIUMS)

    assert resolution.resolved == {}
    assert resolution.ambiguous == {}
    assert resolution.unpriced == {"53703": frozenset({"WI9", "MO3"})}


def test_zip_in_unpriced_area_is_excluded(make_rows):
    rows = make_rows(["64148,MO,29095,Jackson,3"])

    resolution = resolve_zip_areas(rows, ["64148"], PREMIUMS)

    assert resolution.resolved == {}
    assert resolution.unpriced == {"64148": frozenset({"MO3"})}


def test_zip_codes_not_requested_are_ignored(make_rows):
    rows = make_rows(["99999,GA,01001,CountyA,7", "60601,IL,17031,Cook,5"])

    assert resolve_zips(rows, ["60601"], PREMIUMS) == {"60601": "IL5"}


def test_duplicate_requests_resolve_once(make_rows):
    rows = make_rows(["60601,IL,17031,Cook,5"])

    assert resolve_zips(rows, ["60601", "60601"], PREMIUMS) == {"60601": "IL5"}


def test_header_row_is_harmless(make_rows):
    rows = make_rows([HEADER])

    assert resolve_zips(rows, ["36749"], PREMIUMS) == {}


def test_short_row_is_fatal(make_rows):
    rows = make_rows([HEADER, "36749,GA,01001"], path="zips.csv")

    with pytest.raises(MalformedRowError) as excinfo:
        resolve_zips(rows, ["36749"], PREMIUMS)

    assert excinfo.value.line_number == 2
    assert "expected 5 fields, found 3" in str(excinfo.value)


def test_zip_record_from_row_builds_rate_area_key(make_rows):
    (row,) = make_rows(["36749,AL,01001,Autauga,11"])

    record = zip_record_from_row(row)

    assert record.zipcode == "36749"
    assert record.rate_area_key == "AL11"
