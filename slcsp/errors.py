"""
Exception hierarchy for the SLCSP finder.

Input-access and malformed-row failures are fatal for the whole batch. A zip
code that spans several rate areas, or a rate area without two distinct Silver
premiums, is a normal outcome and never raises.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class SlcspError(Exception):
    """Base class for every failure that aborts a run."""


class ConfigurationError(SlcspError):
    """The run cannot start: no usable data location was given."""


class InputAccessError(SlcspError):
    """An input file is missing or cannot be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Problem loading file ('{self.path}'): {reason}")


class MalformedRowError(SlcspError):
    """A data row has too few fields or a premium that is not a number."""

    def __init__(
        self,
        path: Path | str,
        line_number: int,
        row: Optional[Sequence[str]],
        reason: str,
    ) -> None:
        self.path = Path(path)
        self.line_number = line_number
        self.row = list(row) if row is not None else None
        self.reason = reason
        rendered = ",".join(self.row) if self.row is not None else ""
        super().__init__(f"{self.path}:{line_number}: {reason} (line: '{rendered}')")


class OutputWriteError(SlcspError):
    """The results could not be written; the target file was left untouched."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Problem writing file ('{self.path}'): {reason}")


__all__ = [
    "ConfigurationError",
    "InputAccessError",
    "MalformedRowError",
    "OutputWriteError",
    "SlcspError",
]
