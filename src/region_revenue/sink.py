"""
ResultSink: render sorted results to stdout and to an optional result file.

Display lines look like ``GERMANY: 1234.50``; result file lines look like
``GERMANY|1234.50``. A failed file write is logged and swallowed here so
the already printed results stand.
"""

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from src.region_revenue.errors import OutputWriteError

logger = logging.getLogger(__name__)

RESULT_FILENAME = "result.tbl"


def format_revenue(revenue: float) -> str:
    return f"{revenue:.2f}"


def format_display_line(nation: str, revenue: float) -> str:
    return f"{nation}: {format_revenue(revenue)}"


def format_result_line(nation: str, revenue: float) -> str:
    return f"{nation}|{format_revenue(revenue)}"


def print_results(results: Sequence[tuple[str, float]], stream: TextIO | None = None) -> None:
    """Print one display line per nation, in the given order."""
    out = stream if stream is not None else sys.stdout
    for nation, revenue in results:
        print(format_display_line(nation, revenue), file=out)


def write_result_file(results: Sequence[tuple[str, float]], output_dir: str | Path) -> Path:
    """
    Write results to <output_dir>/result.tbl, creating output_dir if needed.

    Returns:
        Path of the written file

    Raises:
        OutputWriteError: if the directory or file cannot be written
    """
    path = Path(output_dir) / RESULT_FILENAME
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            for nation, revenue in results:
                f.write(format_result_line(nation, revenue) + "\n")
    except OSError as exc:
        raise OutputWriteError(path, str(exc)) from exc
    return path


def emit_results(
    results: Sequence[tuple[str, float]],
    output_dir: str | Path | None = None,
    stream: TextIO | None = None,
) -> bool:
    """
    Print results, then write the result file when output_dir is given.

    Returns:
        False if the result file could not be written, True otherwise
    """
    print_results(results, stream)

    if output_dir is None:
        return True

    try:
        path = write_result_file(results, output_dir)
    except OutputWriteError as exc:
        logger.error("%s", exc)
        return False

    logger.info("Wrote %d result rows to %s", len(results), path)
    return True
