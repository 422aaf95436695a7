"""
End-to-end tests for the SLCSP finder.

These tests drive the whole pipeline and the CLI over real files and verify that:
1. The request file is rewritten with one row per request, in order
2. Runs are repeatable, including over the file a previous run produced
3. Failures surface with a non-zero exit code and leave the request file intact
"""

from __future__ import annotations

import csv
import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from slcsp import main as cli
from slcsp.pipeline import run_pipeline
from scripts.generate_data import generate_dataset

DEFAULT_PLANS = 400
DEFAULT_ZIPCODES = 150
DEFAULT_REQUESTS = 60
DEFAULT_RATE_AREAS = 4
DEFAULT_SEED = 7

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_cli_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """The CLI would bind log handlers to the runner's short-lived streams."""
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


def _read_csv(path: Path) -> list[list[str]]:
    with path.open("r", newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestCommandLine:
    """Drive the typer application."""

    def test_run_rewrites_request_file(self, data_dir: Path, expected_output: str):
        result = runner.invoke(cli.app, ["run", str(data_dir), "--quiet"])

        assert result.exit_code == 0, result.output
        assert (data_dir / "slcsp.csv").read_text(encoding="utf-8") == expected_output

    def test_run_prints_summary(self, data_dir: Path):
        result = runner.invoke(cli.app, ["run", str(data_dir)])

        assert result.exit_code == 0, result.output

    def test_run_reads_data_dir_from_environment(
        self, data_dir: Path, expected_output: str, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("SLCSP_DATA_DIR", str(data_dir))

        result = runner.invoke(cli.app, ["run", "--quiet"])

        assert result.exit_code == 0, result.output
        assert (data_dir / "slcsp.csv").read_text(encoding="utf-8") == expected_output

    def test_run_without_data_dir_is_a_configuration_error(self):
        result = runner.invoke(cli.app, ["run", "--quiet"])

        assert result.exit_code == 2
        assert "must be given" in result.output

    def test_run_with_missing_input_exits_non_zero(self, data_dir: Path):
        (data_dir / "zips.csv").unlink()
        before = (data_dir / "slcsp.csv").read_text(encoding="utf-8")

        result = runner.invoke(cli.app, ["run", str(data_dir), "--quiet"])

        assert result.exit_code == 1
        assert "zips.csv" in result.output
        assert (data_dir / "slcsp.csv").read_text(encoding="utf-8") == before

    def test_info_shows_settings(self):
        result = runner.invoke(cli.app, ["info"])

        assert result.exit_code == 0
        assert "metal_level=Silver" in result.output


class TestRepeatability:
    """Re-running the finder must not drift."""

    def test_two_runs_over_fresh_copies_are_identical(
        self, data_dir: Path, tmp_path: Path, test_settings
    ):
        original = tmp_path / "slcsp-original.csv"
        shutil.copyfile(data_dir / "slcsp.csv", original)

        run_pipeline(data_dir=data_dir, settings=test_settings)
        first = (data_dir / "slcsp.csv").read_bytes()

        shutil.copyfile(original, data_dir / "slcsp.csv")
        run_pipeline(data_dir=data_dir, settings=test_settings)
        second = (data_dir / "slcsp.csv").read_bytes()

        assert first == second

    def test_rerun_over_own_output_is_identical(self, data_dir: Path, test_settings):
        run_pipeline(data_dir=data_dir, settings=test_settings)
        first = (data_dir / "slcsp.csv").read_bytes()

        run_pipeline(data_dir=data_dir, settings=test_settings)

        assert (data_dir / "slcsp.csv").read_bytes() == first


class TestGeneratedDataset:
    """Run over a larger synthetic data directory."""

    def test_output_mirrors_request_list(self, tmp_path: Path, test_settings):
        generate_dataset(
            tmp_path,
            plans=DEFAULT_PLANS,
            zipcodes=DEFAULT_ZIPCODES,
            requests=DEFAULT_REQUESTS,
            rate_areas=DEFAULT_RATE_AREAS,
            seed=DEFAULT_SEED,
        )
        requested = [row[0] for row in _read_csv(tmp_path / "slcsp.csv")[1:]]

        result = run_pipeline(data_dir=tmp_path, settings=test_settings)
        written = _read_csv(tmp_path / "slcsp.csv")

        assert written[0] == ["zipcode", "rate"]
        assert [row[0] for row in written[1:]] == requested
        assert len(result.rows) == DEFAULT_REQUESTS
        for zipcode, rate in written[1:]:
            if zipcode in result.resolution.resolved:
                area = result.resolution.resolved[zipcode]
                assert rate == format(result.premiums[area], "f")
            else:
                assert rate == ""
        for zipcode in result.resolution.ambiguous:
            assert zipcode not in result.resolution.resolved
