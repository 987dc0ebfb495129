"""
Pytest configuration and shared fixtures for the region revenue tests.
"""

import random
from collections.abc import Callable
from pathlib import Path

import pytest
from pyspark import SparkContext
from pyspark.sql import SparkSession

from src.common.spark_session import ensure_worker_pythonpath

TableLines = dict[str, list[str]]


@pytest.fixture(scope="session")
def spark() -> SparkSession:
    """
    Create a SparkSession for testing.

    Uses session scope to reuse the same Spark context across all tests,
    which significantly speeds up test execution.
    """
    ensure_worker_pythonpath()

    spark = (
        SparkSession.builder
        .appName("pytest-region-revenue")
        .master("local[2]")  # Use 2 cores for testing
        .config("spark.sql.shuffle.partitions", "2")
        .config("spark.ui.enabled", "false")  # Disable Spark UI for tests
        .config("spark.driver.memory", "1g")
        .getOrCreate()
    )

    spark.sparkContext.setLogLevel("WARN")

    yield spark

    spark.stop()


@pytest.fixture(scope="session")
def sc(spark: SparkSession) -> SparkContext:
    """Get SparkContext from the SparkSession fixture."""
    return spark.sparkContext


def _write_tables(directory: Path, tables: TableLines) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for filename, lines in tables.items():
        (directory / filename).write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return directory


@pytest.fixture
def write_tables(tmp_path: Path) -> Callable[[TableLines], Path]:
    """Return a function writing {filename: lines} into a fresh data directory."""
    counter = iter(range(1_000))

    def _write(tables: TableLines) -> Path:
        return _write_tables(tmp_path / f"data_{next(counter)}", tables)

    return _write


@pytest.fixture
def scenario_tables() -> TableLines:
    """
    Region ASIA with nations N1 and N2, one order with two line items.

    Expected revenue for [1996-01-01, 1996-02-01): N1 = 90.00, N2 = 200.00.
    EUROPE/N3 exists so that region filtering has something to exclude.
    """
    return {
        "region.tbl": [
            "2|ASIA|ges. thinly even pinto beans ca|",
            "3|EUROPE|ly final courts cajole furiously final excuse|",
        ],
        "nation.tbl": [
            "1|N1|2|first asian nation|",
            "2|N2|2|second asian nation|",
            "3|N3|3|european nation|",
        ],
        "supplier.tbl": [
            "1|Supplier#000000001|addr1|1|11-111-111-1111|100.00|comment|",
            "2|Supplier#000000002|addr2|2|12-222-222-2222|200.00|comment|",
        ],
        "customer.tbl": [
            "1|Customer#000000001|addr|1|11-111-111-1111|711.56|BUILDING|comment|",
        ],
        "orders.tbl": [
            "10|1|O|290.00|1996-01-05|5-LOW|Clerk#000000951|0|comment|",
        ],
        "lineitem.tbl": [
            "10|1001|1|1|17|100.00|0.10|0.02|N|O|1996-03-13|1996-02-12|1996-03-22|DELIVER IN PERSON|TRUCK|comment|",
            "10|1002|2|2|36|200.00|0.00|0.06|N|O|1996-04-12|1996-02-28|1996-04-20|TAKE BACK RETURN|MAIL|comment|",
        ],
    }


def generate_tables(seed: int = 7, num_orders: int = 300) -> TableLines:
    """Build a small random TPC-H-shaped dataset with a fixed seed."""
    rng = random.Random(seed)
    region_names = ["AFRICA", "AMERICA", "ASIA", "EUROPE", "MIDDLE EAST"]
    num_nations = 25
    num_suppliers = 40
    num_customers = 60

    regions = [f"{key}|{name}|comment|" for key, name in enumerate(region_names)]
    nations = [f"{key}|NATION_{key:02d}|{key % 5}|comment|" for key in range(num_nations)]
    suppliers = [
        f"{key}|Supplier#{key:09d}|addr|{rng.randrange(num_nations)}|phone|0.00|comment|"
        for key in range(1, num_suppliers + 1)
    ]
    customers = [
        f"{key}|Customer#{key:09d}|addr|{rng.randrange(num_nations)}|phone|0.00|MACHINERY|comment|"
        for key in range(1, num_customers + 1)
    ]

    orders = []
    line_items = []
    for orderkey in range(1, num_orders + 1):
        date = f"{rng.randint(1992, 1998)}-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}"
        orders.append(f"{orderkey}|{rng.randint(1, num_customers)}|O|0.00|{date}|1-URGENT|Clerk|0|comment|")
        for linenumber in range(1, rng.randint(1, 7) + 1):
            suppkey = rng.randint(1, num_suppliers)
            price = round(rng.uniform(900.0, 105000.0), 2)
            discount = rng.randint(0, 10) / 100
            line_items.append(
                f"{orderkey}|{rng.randint(1, 2000)}|{suppkey}|{linenumber}|{rng.randint(1, 50)}"
                f"|{price:.2f}|{discount:.2f}|0.04|N|O|{date}|{date}|{date}|NONE|AIR|comment|"
            )

    return {
        "region.tbl": regions,
        "nation.tbl": nations,
        "supplier.tbl": suppliers,
        "customer.tbl": customers,
        "orders.tbl": orders,
        "lineitem.tbl": line_items,
    }


@pytest.fixture
def random_tables() -> TableLines:
    """A seeded random dataset with a few hundred orders."""
    return generate_tables()
