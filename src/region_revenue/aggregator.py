"""
RevenueAggregator: join, filter and aggregate for one slice of orders.

Computes, for the given orders, the equivalent of:

    SELECT n_name, SUM(l_extendedprice * (1 - l_discount))
    FROM region, nation, supplier, lineitem, orders
    WHERE r_name = :region
      AND o_orderdate >= :start AND o_orderdate < :end
      AND s_nationkey = n_nationkey AND s_suppkey = l_suppkey
      AND l_orderkey = o_orderkey
    GROUP BY n_name

Pattern (map-side join):
  1. Build hash indexes over lineitem (by orderkey) and supplier (by suppkey)
  2. Broadcast them, with the region's nation index, to every worker
  3. Each worker walks its own orders and looks up the indexes

Each call owns a fresh accumulator; nothing is shared or mutated across calls.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence

from src.region_revenue.records import LineItem, Order, Supplier

PartialResult = dict[str, float]


def index_line_items(line_items: Iterable[LineItem]) -> dict[int, list[LineItem]]:
    """Group line items by orderkey, keeping table order within each order."""
    index: dict[int, list[LineItem]] = defaultdict(list)
    for item in line_items:
        index[item.orderkey].append(item)
    return dict(index)


def index_supplier_nations(suppliers: Iterable[Supplier]) -> dict[int, list[int]]:
    """Map suppkey to the nationkey(s) of the supplier rows with that key.

    suppkey is expected to be unique, but keeping a list preserves join
    semantics if a dataset repeats it.
    """
    index: dict[int, list[int]] = defaultdict(list)
    for supplier in suppliers:
        index[supplier.suppkey].append(supplier.nationkey)
    return dict(index)


def line_item_revenue(item: LineItem) -> float:
    return item.extendedprice * (1 - item.discount)


def aggregate_revenue(
    orders: Iterable[Order],
    line_index: Mapping[int, Sequence[LineItem]],
    supplier_nations: Mapping[int, Sequence[int]],
    nation_index: Mapping[int, str],
    start_date: str,
    end_date: str,
) -> PartialResult:
    """
    Sum line item revenue per nation name for orders in [start_date, end_date).

    Dates are compared as raw strings. A line item counts towards the nation
    of its supplier only when that nation is in nation_index; otherwise it
    contributes nothing.

    Args:
        orders: The slice of orders owned by this worker
        line_index: orderkey -> line items (see index_line_items)
        supplier_nations: suppkey -> nationkeys (see index_supplier_nations)
        nation_index: nationkey -> name for the target region
        start_date: Inclusive lower bound
        end_date: Exclusive upper bound

    Returns:
        nation name -> revenue, only for nations with contributing line items
    """
    revenue: dict[str, float] = defaultdict(float)

    for order in orders:
        if not (start_date <= order.orderdate < end_date):
            continue
        for item in line_index.get(order.orderkey, ()):
            for nationkey in supplier_nations.get(item.suppkey, ()):
                name = nation_index.get(nationkey)
                if name is not None:
                    revenue[name] += line_item_revenue(item)

    return dict(revenue)
