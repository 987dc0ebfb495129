"""
RegionNationIndex: nation key -> nation name for the nations of one region.
"""

from collections.abc import Iterable

from src.region_revenue.records import Nation, Region


def build_region_nation_index(
    nations: Iterable[Nation],
    regions: Iterable[Region],
    region_name: str,
) -> dict[int, str]:
    """Map nationkey to name for every nation in the region(s) named region_name.

    The name match is exact and case-sensitive. No matching region is not an
    error: the index is simply empty and the query yields no rows.
    """
    region_keys = {region.regionkey for region in regions if region.name == region_name}
    return {
        nation.nationkey: nation.name
        for nation in nations
        if nation.regionkey in region_keys
    }
