"""
PartitionScheduler: static partitioning of the order table across workers.

The order table is cut into num_threads contiguous index ranges of equal
size, the last range absorbing the remainder. Each range becomes one Spark
partition and is aggregated by one executor slot into its own
PartialResult. Partition sizes are fixed at dispatch time; there is no
rebalancing by per-order line item count.

collect() is the barrier: every partition has finished before the
partials come back, and they are returned in partition index order so
the merge order never depends on which worker finished first.
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence

from pyspark import SparkContext
from pyspark.broadcast import Broadcast

from src.region_revenue.aggregator import PartialResult, aggregate_revenue
from src.region_revenue.records import LineItem, Order

logger = logging.getLogger(__name__)


def partition_bounds(size: int, num_parts: int) -> list[tuple[int, int]]:
    """
    Split range(size) into num_parts contiguous (start, end) ranges.

    Every range has size // num_parts elements except the last, which also
    takes the remainder. With fewer elements than parts the leading ranges
    are empty.

    Examples:
        partition_bounds(10, 3) -> [(0, 3), (3, 6), (6, 10)]
        partition_bounds(2, 4)  -> [(0, 0), (0, 0), (0, 0), (0, 2)]

    Raises:
        ValueError: if num_parts < 1
    """
    if num_parts < 1:
        raise ValueError(f"num_parts must be positive, got {num_parts}")

    chunk_size = size // num_parts
    bounds = []
    for i in range(num_parts):
        start = i * chunk_size
        end = size if i == num_parts - 1 else (i + 1) * chunk_size
        bounds.append((start, end))
    return bounds


def partition_aggregator(
    line_index: Broadcast,
    supplier_nations: Broadcast,
    nation_index: Broadcast,
    start_date: str,
    end_date: str,
) -> Callable[[int, Iterable[list[Order]]], Iterator[tuple[int, PartialResult]]]:
    """Return a mapPartitionsWithIndex function emitting (index, partial) per partition."""

    def _aggregate(index: int, partition: Iterable[list[Order]]) -> Iterator[tuple[int, PartialResult]]:
        orders = [order for chunk in partition for order in chunk]
        partial = aggregate_revenue(
            orders,
            line_index.value,
            supplier_nations.value,
            nation_index.value,
            start_date,
            end_date,
        )
        yield (index, partial)

    return _aggregate


def compute_partials(
    sc: SparkContext,
    orders: Sequence[Order],
    line_index: Mapping[int, Sequence[LineItem]],
    supplier_nations: Mapping[int, Sequence[int]],
    nation_index: Mapping[int, str],
    start_date: str,
    end_date: str,
    num_threads: int,
) -> list[PartialResult]:
    """
    Aggregate revenue over num_threads order partitions in parallel.

    Args:
        sc: SparkContext providing the executor slots
        orders: Full order table
        line_index: orderkey -> line items, broadcast to every worker
        supplier_nations: suppkey -> nationkeys, broadcast to every worker
        nation_index: nationkey -> name for the target region, broadcast
        start_date: Inclusive lower date bound
        end_date: Exclusive upper date bound
        num_threads: Number of partitions

    Returns:
        One PartialResult per partition, ordered by partition index
    """
    bounds = partition_bounds(len(orders), num_threads)
    slices = [list(orders[start:end]) for start, end in bounds]
    logger.debug("Order partitions: %s", bounds)

    line_bc = sc.broadcast(dict(line_index))
    supplier_bc = sc.broadcast(dict(supplier_nations))
    nation_bc = sc.broadcast(dict(nation_index))

    try:
        collected = (
            sc.parallelize(slices, len(slices))
            .mapPartitionsWithIndex(
                partition_aggregator(line_bc, supplier_bc, nation_bc, start_date, end_date)
            )
            .collect()
        )
    finally:
        for bc in (line_bc, supplier_bc, nation_bc):
            bc.unpersist()

    logger.info("Aggregated %d orders over %d partitions", len(orders), len(slices))
    return [partial for _, partial in sorted(collected, key=lambda pair: pair[0])]
