from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from slcsp.config import get_settings
from slcsp.errors import ConfigurationError, SlcspError
from slcsp.pipeline import run_pipeline
from slcsp.reporter import print_summary
from slcsp.utils.logging import configure_logging

app = typer.Typer(help="Second-lowest-cost Silver plan (SLCSP) finder.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"data_dir={settings.data_dir or '-'} | request={settings.request_file} "
        f"plans={settings.plans_file} zips={settings.zips_file} | "
        f"metal_level={settings.metal_level} log_level={settings.log_level}"
    )


@app.command()
def run(
    data_dir: Optional[Path] = typer.Argument(
        None,
        help="Directory containing slcsp.csv, plans.csv and zips.csv (default: SLCSP_DATA_DIR).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write results here instead of replacing the request file.",
    ),
    results_dir: Optional[Path] = typer.Option(
        None,
        "--results-dir",
        help="Persist a JSON run summary into this directory.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Skip the summary tables.",
    ),
) -> None:
    """
    Find the SLCSP of every requested zip code and write the results.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)

    try:
        result = run_pipeline(
            data_dir=data_dir,
            output=output,
            results_dir=results_dir,
            settings=settings,
        )
    except ConfigurationError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc
    except SlcspError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if not quiet:
        print_summary(result)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
