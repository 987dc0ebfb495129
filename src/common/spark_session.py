"""
Shared SparkSession utilities for the revenue pipeline.

The local Spark cluster is the worker pool: ``local[N]`` gives N executor
slots, each running partitions in its own Python worker process.

Logging is configured via conf/log4j2.properties to:
- Write INFO logs to .logs/spark.log
- Only show ERROR on console (keeping query output clean)
"""

import os
from pathlib import Path

from pyspark.sql import SparkSession

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Path to log4j2 config
LOG4J2_CONFIG = PROJECT_ROOT / "conf" / "log4j2.properties"

# Base application name prefix for all Spark sessions
# Final app name will be: APP_NAME_PREFIX-<script_name>
APP_NAME_PREFIX = "RegionRevenue"


def _ensure_logs_dir() -> None:
    """Ensure .logs directory exists."""
    logs_dir = PROJECT_ROOT / ".logs"
    logs_dir.mkdir(exist_ok=True)


def ensure_worker_pythonpath() -> None:
    """
    Expose the project root to executor Python workers.

    Parse and aggregate functions are pickled by reference, so workers must
    be able to import ``src.*``. The JVM inherits this environment when it
    is launched, and passes it on to the workers it forks.
    """
    root = str(PROJECT_ROOT)
    current = os.environ.get("PYTHONPATH", "")
    entries = current.split(os.pathsep) if current else []
    if root not in entries:
        os.environ["PYTHONPATH"] = os.pathsep.join([root, *entries])


def app_name(script: str | None = None) -> str:
    """
    Spark application name for a script.

    A path such as __file__ contributes its stem in TitleCase, so
    ".../region_revenue/main.py" gives "RegionRevenue-Main". Any other
    string is appended unchanged, and None gives the bare prefix.
    """
    if not script:
        return APP_NAME_PREFIX
    if "/" in script or script.endswith(".py"):
        script = "".join(part.capitalize() for part in Path(script).stem.split("_"))
    return f"{APP_NAME_PREFIX}-{script}"


def local_master(num_threads: int) -> str:
    """
    Spark master URL for a local pool of ``num_threads`` executor slots.

    Raises:
        ValueError: if num_threads is not positive
    """
    if num_threads < 1:
        raise ValueError(f"num_threads must be positive, got {num_threads}")
    return f"local[{num_threads}]"


def create_spark_session(
    script_name: str | None = None,
    master: str = "local[*]",
) -> SparkSession:
    """
    Create a SparkSession with common configurations.

    Logging is configured to write detailed logs to .logs/spark.log
    while only showing errors on the console.

    Args:
        script_name: Identifier for this script. Can be either:
                     - A file path like __file__ (auto-converts snake_case to TitleCase)
                     - A direct name like "RegionRevenue"
        master: Spark master URL (default: local[*]); use local_master()
                to size the pool from a thread count

    Returns:
        Configured SparkSession instance
    """
    _ensure_logs_dir()
    ensure_worker_pythonpath()

    # Change working directory context for log4j file output
    original_cwd = os.getcwd()
    os.chdir(PROJECT_ROOT)

    try:
        builder = SparkSession.builder.appName(app_name(script_name)).master(master)

        if LOG4J2_CONFIG.exists():
            builder = builder.config(
                "spark.driver.extraJavaOptions",
                f"-Dlog4j.configurationFile=file:{LOG4J2_CONFIG}",
            )

        spark = (
            builder.config("spark.sql.shuffle.partitions", "4")
            .config("spark.driver.memory", "2g")
            .config("spark.ui.showConsoleProgress", "false")
            .getOrCreate()
        )

        spark.sparkContext.setLogLevel("ERROR")

        return spark
    finally:
        os.chdir(original_cwd)
