"""
TableLoader: parallel parsing of table files into typed records.

Algorithm:
    1. Read the file's non-blank lines on the driver, keeping line numbers
    2. Split them into worker_count contiguous chunks by line index
    3. Ship one chunk per Spark partition and parse it on an executor
    4. Each partition emits ONE ParsedChunk (index, records, first failure)
    5. The driver concatenates chunks by partition index, not completion time

Because chunks are re-ordered by index, the loaded table has the same
record order as the file for every worker count.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any, NamedTuple

from pyspark import SparkContext

from src.common.data_loader import get_table_path, read_numbered_lines
from src.region_revenue.errors import ParseError
from src.region_revenue.records import (
    Customer,
    LineItem,
    Nation,
    Order,
    Region,
    Supplier,
    parse_customer,
    parse_line_item,
    parse_nation,
    parse_order,
    parse_region,
    parse_supplier,
)
from src.region_revenue.scheduler import partition_bounds

logger = logging.getLogger(__name__)

CUSTOMER_FILE = "customer.tbl"
ORDERS_FILE = "orders.tbl"
LINEITEM_FILE = "lineitem.tbl"
SUPPLIER_FILE = "supplier.tbl"
NATION_FILE = "nation.tbl"
REGION_FILE = "region.tbl"


class ParsedChunk(NamedTuple):
    index: int
    records: list[Any]
    failure: tuple[int, str, str] | None  # (line_number, line, reason)


class Tables(NamedTuple):
    customers: list[Customer]
    orders: list[Order]
    line_items: list[LineItem]
    suppliers: list[Supplier]
    nations: list[Nation]
    regions: list[Region]


def chunk_parser(
    parse_fn: Callable[[str], Any],
) -> Callable[[int, Iterable[list[tuple[int, str]]]], Iterator[ParsedChunk]]:
    """Return a mapPartitionsWithIndex function that parses its chunk with parse_fn.

    Parsing stops at the first bad line of the chunk; the failure is
    reported back to the driver instead of raised on the executor, so the
    driver can raise a ParseError with full context.
    """

    def _parse(index: int, partition: Iterable[list[tuple[int, str]]]) -> Iterator[ParsedChunk]:
        records = []
        failure = None
        for chunk in partition:
            for line_number, line in chunk:
                try:
                    records.append(parse_fn(line))
                except (ValueError, IndexError) as exc:
                    failure = (line_number, line, f"{type(exc).__name__}: {exc}")
                    break
            if failure is not None:
                break
        yield ParsedChunk(index, records, failure)

    return _parse


def load_table(
    sc: SparkContext,
    file_path: str | Path,
    parse_fn: Callable[[str], Any],
    worker_count: int,
) -> list[Any]:
    """
    Load one table file into a list of records using worker_count parsers.

    Args:
        sc: SparkContext whose executors do the parsing
        file_path: Path to the .tbl file
        parse_fn: Line parser from src.region_revenue.records
        worker_count: Number of contiguous chunks (and partitions)

    Returns:
        Records in file order

    Raises:
        FileAccessError: if the file cannot be read
        ParseError: for the first malformed line, by chunk index
    """
    numbered = read_numbered_lines(file_path)
    bounds = partition_bounds(len(numbered), worker_count)
    chunks = [numbered[start:end] for start, end in bounds]

    parsed = (
        sc.parallelize(chunks, len(chunks))
        .mapPartitionsWithIndex(chunk_parser(parse_fn))
        .collect()
    )

    records: list[Any] = []
    for chunk in sorted(parsed, key=lambda c: c.index):
        if chunk.failure is not None:
            line_number, line, reason = chunk.failure
            raise ParseError(str(file_path), line_number, line, reason)
        records.extend(chunk.records)

    logger.info("Loaded %d records from %s (%d chunks)", len(records), file_path, len(chunks))
    return records


def load_tables(sc: SparkContext, data_path: str | Path, worker_count: int) -> Tables:
    """Load all six tables from data_path. Every load finishes before this returns."""

    def _load(filename: str, parse_fn: Callable[[str], Any]) -> list[Any]:
        return load_table(sc, get_table_path(data_path, filename), parse_fn, worker_count)

    return Tables(
        customers=_load(CUSTOMER_FILE, parse_customer),
        orders=_load(ORDERS_FILE, parse_order),
        line_items=_load(LINEITEM_FILE, parse_line_item),
        suppliers=_load(SUPPLIER_FILE, parse_supplier),
        nations=_load(NATION_FILE, parse_nation),
        regions=_load(REGION_FILE, parse_region),
    )
