"""
Region revenue query: command-line entry point.

Usage:
    region-revenue <data_path> <region_name> <start_date> <end_date> <num_threads> [<output_dir>]

Example:
    region-revenue ./data ASIA 1994-01-01 1995-01-01 4 ./out

Prints "<nation>: <revenue>" per nation of the region, ascending by name,
and writes "<nation>|<revenue>" lines to <output_dir>/result.tbl when an
output directory is given. Dates must be YYYY-MM-DD; the range is
[start_date, end_date).

Exit codes: 0 on success (including a failed result file write),
1 on a usage error. Missing or malformed table files raise.
"""

import logging
import os
import sys
import time
from typing import TextIO

from pyspark import SparkContext

from src.common.spark_session import create_spark_session, local_master
from src.region_revenue.config import QueryConfig, parse_args
from src.region_revenue.errors import UsageError
from src.region_revenue.query import run_query
from src.region_revenue.sink import emit_results

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV = "REGION_REVENUE_LOG_LEVEL"


def resolve_log_level(name: str | None) -> int:
    """Map a level name such as "info" to its number; unknown names give WARNING."""
    if not name:
        return logging.WARNING
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def execute(
    sc: SparkContext,
    config: QueryConfig,
    stream: TextIO | None = None,
) -> list[tuple[str, float]]:
    """Run the query described by config and emit its results."""
    results = run_query(
        sc,
        config.data_path,
        config.region_name,
        config.start_date,
        config.end_date,
        config.num_threads,
    )
    emit_results(results, config.output_dir, stream)
    return results


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the query on a local Spark pool and report timing."""
    level = resolve_log_level(os.environ.get(LOG_LEVEL_ENV))
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    args = sys.argv[1:] if argv is None else argv
    try:
        config = parse_args(args)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return 1

    logger.info("Running query %s", config)

    print("Processing data...")
    started = time.perf_counter()

    spark = create_spark_session(__file__, master=local_master(config.num_threads))
    try:
        execute(spark.sparkContext, config)
    finally:
        spark.stop()

    elapsed = time.perf_counter() - started
    print(f"Time taken: {elapsed:.2f} s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
