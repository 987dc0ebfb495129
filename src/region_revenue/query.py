"""
Local supplier volume query: revenue per nation of one region over a date range.

Pipeline:
  1. Load all six tables in parallel          (barrier: every load collected)
  2. Build the region's nation index and the lineitem/supplier hash indexes
  3. Aggregate order partitions in parallel   (barrier: every partial collected)
  4. Merge partials in partition order and sort by nation name
"""

import logging

from pyspark import SparkContext

from src.region_revenue.aggregator import index_line_items, index_supplier_nations
from src.region_revenue.loader import Tables, load_tables
from src.region_revenue.merger import merge_partials, sort_results
from src.region_revenue.nation_index import build_region_nation_index
from src.region_revenue.scheduler import compute_partials

logger = logging.getLogger(__name__)


def revenue_by_nation(
    sc: SparkContext,
    tables: Tables,
    region_name: str,
    start_date: str,
    end_date: str,
    num_threads: int,
) -> dict[str, float]:
    """Run the join/aggregate phase over already loaded tables."""
    nation_index = build_region_nation_index(tables.nations, tables.regions, region_name)
    if not nation_index:
        logger.warning("No nations found for region %r", region_name)
    else:
        logger.info("Region %r has %d nations", region_name, len(nation_index))

    partials = compute_partials(
        sc,
        tables.orders,
        index_line_items(tables.line_items),
        index_supplier_nations(tables.suppliers),
        nation_index,
        start_date,
        end_date,
        num_threads,
    )
    return merge_partials(partials)


def run_query(
    sc: SparkContext,
    data_path: str,
    region_name: str,
    start_date: str,
    end_date: str,
    num_threads: int,
) -> list[tuple[str, float]]:
    """
    Load the tables under data_path and compute sorted revenue per nation.

    Returns:
        (nation, revenue) pairs sorted ascending by nation name

    Raises:
        FileAccessError: if a table file cannot be read
        ParseError: if a table file holds a malformed line
    """
    tables = load_tables(sc, data_path, num_threads)
    merged = revenue_by_nation(sc, tables, region_name, start_date, end_date, num_threads)
    return sort_results(merged)
