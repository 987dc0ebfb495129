"""
ResultMerger: combine per-worker partials into the final result.

Partials are added in the order given, which callers keep as partition
index order. Floating-point addition is not associative, so a fixed order
is what makes the last bits of each total reproducible for a given
num_threads.
"""

from collections.abc import Iterable, Mapping


def merge_partials(partials: Iterable[Mapping[str, float]]) -> dict[str, float]:
    """Sum partial results key-wise, in iteration order."""
    merged: dict[str, float] = {}
    for partial in partials:
        for nation, revenue in partial.items():
            merged[nation] = merged.get(nation, 0.0) + revenue
    return merged


def sort_results(merged: Mapping[str, float]) -> list[tuple[str, float]]:
    """Return (nation, revenue) pairs sorted ascending by nation name."""
    return sorted(merged.items(), key=lambda pair: pair[0])
