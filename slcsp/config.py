"""
Configuration settings for the SLCSP finder.

Uses Pydantic Settings to load environment variables for the data directory,
input/output file names, logging, and run-summary persistence.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from slcsp.errors import ConfigurationError


@dataclass(frozen=True)
class InputPaths:
    """Locations of the three input files and the output file for one run."""

    request: Path
    plans: Path
    zips: Path
    output: Path


class Settings(BaseSettings):
    # Data location
    data_dir: Optional[Path] = Field(None, alias="SLCSP_DATA_DIR")
    request_file: str = Field("slcsp.csv", alias="SLCSP_REQUEST_FILE")
    plans_file: str = Field("plans.csv", alias="SLCSP_PLANS_FILE")
    zips_file: str = Field("zips.csv", alias="SLCSP_ZIPS_FILE")

    # Plan selection
    metal_level: str = Field("Silver", alias="SLCSP_METAL_LEVEL")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="LOG_JSON")

    # Run summaries
    results_dir: Optional[Path] = Field(None, alias="SLCSP_RESULTS_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def resolve_paths(
        self, data_dir: Optional[Path | str] = None, output: Optional[Path | str] = None
    ) -> InputPaths:
        """
        Build the input/output locations for a run.

        ``data_dir`` wins over the configured ``SLCSP_DATA_DIR``. The output
        defaults to the request file itself, which is replaced in place.
        """
        base = Path(data_dir) if data_dir is not None else self.data_dir
        if base is None:
            raise ConfigurationError(
                "The location of the data must be given as the first argument "
                "or through SLCSP_DATA_DIR."
            )
        if not base.is_dir():
            raise ConfigurationError(f"Data location '{base}' is not a directory.")

        request = base / self.request_file
        return InputPaths(
            request=request,
            plans=base / self.plans_file,
            zips=base / self.zips_file,
            output=Path(output) if output is not None else request,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["InputPaths", "Settings", "get_settings"]
