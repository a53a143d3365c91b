"""
stats.py — Dataset statistics.

Counts are recomputed from a full traversal on every call; the tree is small
and never changes after load.
"""

from __future__ import annotations

from ug_locations.models import Hierarchy, Statistics


def get_statistics(hierarchy: Hierarchy) -> Statistics:
    """Return total counts of districts, constituencies, sub-counties and electoral areas."""
    constituencies = 0
    sub_counties = 0
    electoral_areas = 0

    for district in hierarchy.districts:
        constituencies += len(district.constituencies)
        for constituency in district.constituencies:
            sub_counties += len(constituency.subcounties)
            for subcounty in constituency.subcounties:
                electoral_areas += len(subcounty.electoral_areas)

    return Statistics(
        districts=len(hierarchy.districts),
        constituencies=constituencies,
        sub_counties=sub_counties,
        electoral_areas=electoral_areas,
    )
