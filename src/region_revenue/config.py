"""
Run configuration from positional command-line arguments.
"""

from typing import NamedTuple

from src.region_revenue.errors import UsageError

USAGE = (
    "Usage: region-revenue <data_path> <region_name> <start_date> <end_date> "
    "<num_threads> [<output_dir>]"
)


class QueryConfig(NamedTuple):
    data_path: str
    region_name: str
    start_date: str
    end_date: str
    num_threads: int
    output_dir: str | None = None


def parse_args(argv: list[str]) -> QueryConfig:
    """
    Build a QueryConfig from arguments (without the program name).

    Raises:
        UsageError: if a required argument is missing or num_threads is
                    not a positive integer
    """
    if len(argv) < 5:
        raise UsageError(USAGE)

    data_path, region_name, start_date, end_date, threads = argv[:5]
    output_dir = argv[5] if len(argv) > 5 else None

    try:
        num_threads = int(threads)
    except ValueError:
        raise UsageError(f"num_threads must be an integer, got {threads!r}\n{USAGE}") from None
    if num_threads < 1:
        raise UsageError(f"num_threads must be at least 1, got {num_threads}\n{USAGE}")

    return QueryConfig(data_path, region_name, start_date, end_date, num_threads, output_dir)
