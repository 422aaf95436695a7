"""
Infrastructure package for the SLCSP finder.

Centralizes file I/O concerns (reading the three CSV inputs, writing the
results). Keep this layer focused on I/O and resource management, decoupled
from the aggregation and resolution logic.
"""

from slcsp.infrastructure.csv_io import (
    OUTPUT_HEADER,
    load_request_list,
    read_rows,
    write_results,
)

__all__ = [
    "OUTPUT_HEADER",
    "load_request_list",
    "read_rows",
    "write_results",
]
