"""
Synthetic data generation script for the SLCSP finder.

Writes a deterministic pseudo-random data directory (slcsp.csv, plans.csv,
zips.csv) in the layout the finder reads. Useful for demos and for exercising
the pipeline on more rows than the unit fixtures carry.
"""

from __future__ import annotations

import csv
import random
import sys
import time
from pathlib import Path

import typer

app = typer.Typer(help="Generate a synthetic SLCSP data directory (slcsp.csv, plans.csv, zips.csv).")

STATES = ["AL", "GA", "IL", "MO", "NY", "WI"]
METAL_LEVELS = ["Bronze", "Silver", "Gold", "Platinum", "Catastrophic"]

PLANS_HEADER = ["plan_id", "state", "metal_level", "rate", "rate_area"]
ZIPS_HEADER = ["zipcode", "state", "county_code", "name", "rate_area"]
REQUEST_HEADER = ["zipcode", "rate"]


def _generate_plans_csv(csv_path: Path, plans: int, rate_areas: int, seed: int) -> None:
    rng = random.Random(seed)
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(PLANS_HEADER)
        for _ in range(plans):
            plan_id = f"{rng.randint(10000, 99999)}{rng.choice('ABCDEFGHJKLMNPQRSTUVWXYZ')}" + "".join(
                rng.choice("ABCDEFGHJKLMNPQRSTUVWXYZ0123456789") for _ in range(8)
            )
            writer.writerow(
                [
                    plan_id,
                    rng.choice(STATES),
                    rng.choice(METAL_LEVELS),
                    f"{rng.uniform(150, 550):.2f}",
                    rng.randint(1, rate_areas),
                ]
            )


def _generate_zips_csv(
    csv_path: Path, zipcodes: list[str], rate_areas: int, seed: int, split_ratio: float = 0.1
) -> None:
    """
    One row per zip code and county. Some zip codes get a second county in the
    same rate area, others (``split_ratio``) a second county in another one.
    """
    rng = random.Random(seed)
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(ZIPS_HEADER)
        for zipcode in zipcodes:
            state = rng.choice(STATES)
            area = rng.randint(1, rate_areas)
            county = rng.randint(1000, 99999)
            writer.writerow([zipcode, state, f"{county:05d}", f"County{county}", area])
            roll = rng.random()
            if roll < split_ratio:
                other = area % rate_areas + 1
                writer.writerow([zipcode, state, f"{county + 1:05d}", f"County{county + 1}", other])
            elif roll < split_ratio * 2:
                writer.writerow([zipcode, state, f"{county + 2:05d}", f"County{county + 2}", area])


def _generate_request_csv(csv_path: Path, zipcodes: list[str], requests: int, seed: int) -> None:
    rng = random.Random(seed)
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(REQUEST_HEADER)
        for _ in range(requests):
            writer.writerow([rng.choice(zipcodes), ""])


def generate_dataset(
    data_dir: Path, plans: int, zipcodes: int, requests: int, rate_areas: int, seed: int
) -> None:
    data_dir.mkdir(parents=True, exist_ok=True)
    rng = random.Random(seed)
    zips = sorted({f"{rng.randint(10000, 99999)}" for _ in range(zipcodes)})
    _generate_plans_csv(data_dir / "plans.csv", plans=plans, rate_areas=rate_areas, seed=seed)
    _generate_zips_csv(data_dir / "zips.csv", zips, rate_areas=rate_areas, seed=seed + 1)
    _generate_request_csv(data_dir / "slcsp.csv", zips, requests=requests, seed=seed + 2)


@app.command()
def main(
    output: Path = typer.Argument(..., help="Directory to write the three CSV files into."),
    plans: int = typer.Option(5_000, "--plans", "-p", help="Number of plan rows."),
    zipcodes: int = typer.Option(2_000, "--zipcodes", "-z", help="Number of distinct zip codes."),
    requests: int = typer.Option(50, "--requests", "-r", help="Number of request-list rows."),
    rate_areas: int = typer.Option(10, "--rate-areas", help="Rate areas per state."),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
) -> None:
    """
    Generate a synthetic data directory for the SLCSP finder.
    """
    start = time.perf_counter()
    typer.echo(f"Generating {plans:,} plans, {zipcodes:,} zip codes -> {output} (seed={seed})")
    generate_dataset(
        output,
        plans=plans,
        zipcodes=zipcodes,
        requests=requests,
        rate_areas=rate_areas,
        seed=seed,
    )
    typer.echo(f"Generation completed in {time.perf_counter() - start:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
