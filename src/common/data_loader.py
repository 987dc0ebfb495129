"""
Data file access for the input tables.

This module only locates and reads table files; splitting lines into
typed records happens on the executors (see src/region_revenue/loader.py).
"""

import logging
from pathlib import Path

from src.region_revenue.errors import FileAccessError

logger = logging.getLogger(__name__)


def get_table_path(data_path: str | Path, filename: str) -> Path:
    """
    Get the full path to a table file within a data directory.

    Args:
        data_path: Directory holding the .tbl files
        filename: Table file name (e.g., "orders.tbl")

    Returns:
        Full path to the table file
    """
    return Path(data_path) / filename


def read_numbered_lines(path: str | Path) -> list[tuple[int, str]]:
    """
    Read a text file into (line_number, line) pairs.

    Every physical line is returned, blank ones included, so that the
    parser sees each record and a blank line fails like any malformed one.
    Line numbers are 1-based. The final line terminator does not produce
    an extra empty line.

    Args:
        path: Path to the file

    Returns:
        List of (line_number, line) for every line in the file

    Raises:
        FileAccessError: if the file cannot be opened or decoded
    """
    path = Path(path)

    try:
        with path.open("r", encoding="utf-8") as f:
            numbered = [(line_number, line.rstrip("\r\n")) for line_number, line in enumerate(f, start=1)]
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(path, str(exc)) from exc

    logger.debug("Read %d lines from %s", len(numbered), path)
    return numbered
