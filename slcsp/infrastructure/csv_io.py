"""
CSV input/output for the SLCSP finder.

Every input file is opened, fully read, and closed before the next stage
starts. The output is written to a temporary file beside the target and moved
over it with ``os.replace``, so a failure part-way through never leaves a
truncated file in place of the request list.
"""

from __future__ import annotations

import csv
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List

from slcsp.domain.models import SlcspRow, SourceRow
from slcsp.errors import InputAccessError, MalformedRowError, OutputWriteError
from slcsp.utils.logging import get_logger

log = get_logger(__name__)

OUTPUT_HEADER = ("zipcode", "rate")


def read_rows(path: Path) -> List[SourceRow]:
    """
    Read every non-blank line of a CSV file, header included.

    Fields are stripped of surrounding whitespace. Raises InputAccessError when
    the file cannot be opened or decoded, MalformedRowError when the CSV
    itself cannot be tokenized.
    """
    rows: List[SourceRow] = []
    try:
        with path.open("r", newline="", encoding="utf-8") as f:
            reader = csv.reader(f)
            try:
                for fields in reader:
                    if not fields or all(not field.strip() for field in fields):
                        continue
                    rows.append(
                        SourceRow(path, reader.line_num, tuple(field.strip() for field in fields))
                    )
            except csv.Error as exc:
                raise MalformedRowError(path, reader.line_num, None, str(exc)) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InputAccessError(path, str(exc)) from exc

    log.debug("Read CSV rows", extra={"path": str(path), "rows": len(rows)})
    return rows


def load_request_list(path: Path) -> List[str]:
    """
    Load the ordered list of requested zip codes.

    The first line is a header and is skipped. Only the first field of each
    row is kept, so ``64148,`` and ``64148,245.20`` both yield ``64148``.
    Order and duplicates are preserved.
    """
    rows = read_rows(path)
    return [row.fields[0] for row in rows[1:]]


def write_results(path: Path, rows: Iterable[SlcspRow]) -> int:
    """
    Write ``zipcode,rate`` rows to ``path``, replacing it atomically.

    Returns the number of data rows written.
    """
    path = Path(path)
    written = 0
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            newline="",
            encoding="utf-8",
        ) as tmp:
            tmp_path = Path(tmp.name)
            try:
                writer = csv.writer(tmp, lineterminator="\n")
                writer.writerow(OUTPUT_HEADER)
                for row in rows:
                    writer.writerow(row.to_csv_fields())
                    written += 1
                tmp.flush()
                os.fsync(tmp.fileno())
            except BaseException:
                tmp.close()
                tmp_path.unlink(missing_ok=True)
                raise
        try:
            if path.exists():
                shutil.copymode(path, tmp_path)
            os.replace(tmp_path, path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise OutputWriteError(path, str(exc)) from exc

    log.debug("Wrote results", extra={"path": str(path), "rows": written})
    return written


__all__ = ["OUTPUT_HEADER", "load_request_list", "read_rows", "write_results"]
