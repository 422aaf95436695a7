"""
Pytest configuration for the SLCSP finder.

Provides fixtures for:
- Settings isolated from the developer's environment
- A small data directory covering the interesting cases (duplicate premiums,
  zip codes in several counties, ambiguous zip codes, unpriced rate areas)
- Helpers to build raw CSV rows without touching disk
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List, Sequence

import pytest

from slcsp.config import Settings, get_settings
from slcsp.domain.models import SourceRow

PLANS_CSV = """\
plan_id,state,metal_level,rate,rate_area
74449NR9870320,GA,Silver,100.00,7
26325VH2723968,GA,Silver,100.00,7
92479NE2717245,GA,Silver,200.00,7
40205AA4917165,GA,Gold,50.00,7
11698OD6718414,NY,Silver,300.00,1
71039NM6436402,NY,Silver,310.50,1
56712GH3461744,NY,Silver,280.00,2
13872QK3473291,NY,Silver,290.25,2
28341NR6637411,IL,Silver,245.2,5
79512SK5513299,IL,Silver,250,5
45009XJ0349017,IL,Bronze,199.00,5
93135CB1519301,MO,Silver,199.99,3
29212YU1742519,WI,Silver,330.00,9
63546LN8823201,WI,Silver,330.00,9
"""

ZIPS_CSV = """\
zipcode,state,county_code,name,rate_area
36749,GA,01001,CountyA,7
36749,GA,02002,CountyB,7
10001,NY,36061,New York,1
10001,NY,36047,Kings,2
60601,IL,17031,Cook,5
64148,MO,29095,Jackson,3
53703,WI,55025,Dane,9
99999,GA,01001,CountyA,7
54321,WI,55025,Dane,9
54321,IL,17031,Cook,5
"""

REQUEST_CSV = """\
zipcode,rate
36749,
10001,
60601,
64148,
36749,
53703,
54321,
11111,
"""

EXPECTED_OUTPUT_CSV = """\
zipcode,rate
36749,200.00
10001,
60601,250.00
64148,
36749,200.00
53703,
54321,250.00
11111,
"""


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterable[None]:
    """
    Keep SLCSP_* variables of the developer's shell out of the tests.
    """
    for name in (
        "SLCSP_DATA_DIR",
        "SLCSP_REQUEST_FILE",
        "SLCSP_PLANS_FILE",
        "SLCSP_ZIPS_FILE",
        "SLCSP_METAL_LEVEL",
        "SLCSP_RESULTS_DIR",
        "LOG_LEVEL",
        "LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides and no .env lookup.
    """
    return Settings(_env_file=None, log_level="DEBUG")


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """
    A data directory holding slcsp.csv, plans.csv and zips.csv.
    """
    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "plans.csv").write_text(PLANS_CSV, encoding="utf-8")
    (directory / "zips.csv").write_text(ZIPS_CSV, encoding="utf-8")
    (directory / "slcsp.csv").write_text(REQUEST_CSV, encoding="utf-8")
    return directory


@pytest.fixture
def make_rows() -> Callable[[Sequence[str]], List[SourceRow]]:
    """
    Build SourceRows from CSV text lines; line numbers start at 1.
    """

    def _make_rows(lines: Sequence[str], path: str = "memory.csv") -> List[SourceRow]:
        return [
            SourceRow(Path(path), number, tuple(line.split(",")))
            for number, line in enumerate(lines, start=1)
        ]

    return _make_rows


@pytest.fixture
def expected_output() -> str:
    """
    The results file the sample data directory must produce.
    """
    return EXPECTED_OUTPUT_CSV
