"""
resolver.py — Strict path resolution and name search over the hierarchy.

Unlike the permissive list operations in index.py, ``resolve`` is
all-or-nothing: either every code in the chain matches and the full named
path comes back, or the caller gets ``None``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, TypeVar

from ug_locations.models import (
    Hierarchy,
    LocationHierarchy,
    LocationRef,
    SearchLevel,
    SearchResult,
)

logger = logging.getLogger(__name__)

_Node = TypeVar("_Node")


def find_by_code(nodes: Iterable[_Node], code: Optional[str]) -> Optional[_Node]:
    """Return the first node among siblings whose code equals ``code``."""
    return next((node for node in nodes if node.code == code), None)


def resolve(
    hierarchy: Hierarchy,
    district_code: Optional[str],
    constituency_code: Optional[str],
    subcounty_code: Optional[str],
    electoral_area_code: Optional[str],
) -> Optional[LocationHierarchy]:
    """
    Descend the full four-code chain and return the named path.

    Returns:
        LocationHierarchy when every link matches, otherwise None.
    """
    district = find_by_code(hierarchy.districts, district_code)
    if district is None:
        return None

    constituency = find_by_code(district.constituencies, constituency_code)
    if constituency is None:
        return None

    subcounty = find_by_code(constituency.subcounties, subcounty_code)
    if subcounty is None:
        return None

    area = find_by_code(subcounty.electoral_areas, electoral_area_code)
    if area is None:
        return None

    return LocationHierarchy(
        district=LocationRef.of(district),
        constituency=LocationRef.of(constituency),
        sub_county=LocationRef.of(subcounty),
        electoral_area=LocationRef.of(area),
    )


def search(
    hierarchy: Hierarchy,
    term: Optional[str],
    level: SearchLevel | str = SearchLevel.ALL,
) -> list[SearchResult]:
    """
    Case-insensitive substring search over node names.

    The tree is walked once, depth-first, so results come back in traversal
    order: a district hit precedes hits inside that district, and so on.
    No ranking or deduplication is applied.

    Args:
        hierarchy: Loaded tree.
        term:      Substring to look for; empty or None yields ``[]``.
        level:     Which level(s) to match at.

    Raises:
        ValueError: If ``term`` is non-empty and ``level`` is not a known
                    SearchLevel.
    """
    if not term:
        return []
    level = SearchLevel(level)

    needle = term.lower()
    everywhere = level is SearchLevel.ALL

    def wanted(at: SearchLevel, name: str) -> bool:
        return (everywhere or level is at) and needle in name.lower()

    results: list[SearchResult] = []
    for district in hierarchy.districts:
        d_ref = LocationRef.of(district)
        if wanted(SearchLevel.DISTRICT, district.name):
            results.append(SearchResult(type=SearchLevel.DISTRICT, district=d_ref))

        for constituency in district.constituencies:
            c_ref = LocationRef.of(constituency)
            if wanted(SearchLevel.CONSTITUENCY, constituency.name):
                results.append(SearchResult(
                    type=SearchLevel.CONSTITUENCY,
                    district=d_ref,
                    constituency=c_ref,
                ))

            for subcounty in constituency.subcounties:
                s_ref = LocationRef.of(subcounty)
                if wanted(SearchLevel.SUBCOUNTY, subcounty.name):
                    results.append(SearchResult(
                        type=SearchLevel.SUBCOUNTY,
                        district=d_ref,
                        constituency=c_ref,
                        sub_county=s_ref,
                    ))

                for area in subcounty.electoral_areas:
                    if wanted(SearchLevel.ELECTORAL_AREA, area.name):
                        results.append(SearchResult(
                            type=SearchLevel.ELECTORAL_AREA,
                            district=d_ref,
                            constituency=c_ref,
                            sub_county=s_ref,
                            electoral_area=LocationRef.of(area),
                        ))

    logger.debug("Search %r at level %s matched %d locations", term, level.value, len(results))
    return results
