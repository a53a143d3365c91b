"""
index.py — The loaded, read-only view over the electoral hierarchy.

LocationIndex is the "Loaded" half of the selector: it can only be obtained
from a successfully parsed dataset, so none of its methods needs a readiness
check. The list operations are permissive. A missing or unmatched ancestor
code yields an empty list (never an exception), with a warning logged when a
non-empty code fails to match.
"""

from __future__ import annotations

import logging
from typing import Optional

from ug_locations import resolver, stats
from ug_locations.models import (
    Constituency,
    District,
    Hierarchy,
    LocationHierarchy,
    LocationRef,
    SearchLevel,
    SearchResult,
    Statistics,
    SubCounty,
)
from ug_locations.resolver import find_by_code

logger = logging.getLogger(__name__)


class LocationIndex:
    """Lookups, search and statistics over an immutable Hierarchy."""

    def __init__(self, hierarchy: Hierarchy):
        self._hierarchy = hierarchy

    @property
    def hierarchy(self) -> Hierarchy:
        return self._hierarchy

    # ── Descent helpers ──────────────────────────────────────────────────────

    def _district(self, district_code: str) -> Optional[District]:
        district = find_by_code(self._hierarchy.districts, district_code)
        if district is None:
            logger.warning("District with code %s not found", district_code)
        return district

    def _constituency(self, district_code: str, constituency_code: str) -> Optional[Constituency]:
        district = self._district(district_code)
        if district is None:
            return None
        constituency = find_by_code(district.constituencies, constituency_code)
        if constituency is None:
            logger.warning(
                "Constituency with code %s not found in district %s",
                constituency_code, district_code,
            )
        return constituency

    def _subcounty(
        self, district_code: str, constituency_code: str, subcounty_code: str,
    ) -> Optional[SubCounty]:
        constituency = self._constituency(district_code, constituency_code)
        if constituency is None:
            return None
        subcounty = find_by_code(constituency.subcounties, subcounty_code)
        if subcounty is None:
            logger.warning(
                "Sub-county with code %s not found in constituency %s",
                subcounty_code, constituency_code,
            )
        return subcounty

    # ── Permissive lookups ───────────────────────────────────────────────────

    def list_districts(self) -> list[LocationRef]:
        return [LocationRef.of(d) for d in self._hierarchy.districts]

    def list_constituencies(self, district_code: Optional[str]) -> list[LocationRef]:
        if not district_code:
            return []
        district = self._district(district_code)
        if district is None:
            return []
        return [LocationRef.of(c) for c in district.constituencies]

    def list_sub_counties(
        self,
        district_code: Optional[str],
        constituency_code: Optional[str],
    ) -> list[LocationRef]:
        if not district_code or not constituency_code:
            return []
        constituency = self._constituency(district_code, constituency_code)
        if constituency is None:
            return []
        return [LocationRef.of(s) for s in constituency.subcounties]

    def list_electoral_areas(
        self,
        district_code: Optional[str],
        constituency_code: Optional[str],
        subcounty_code: Optional[str],
    ) -> list[LocationRef]:
        if not district_code or not constituency_code or not subcounty_code:
            return []
        subcounty = self._subcounty(district_code, constituency_code, subcounty_code)
        if subcounty is None:
            return []
        return [LocationRef.of(a) for a in subcounty.electoral_areas]

    # ── Strict resolution, search, statistics ────────────────────────────────

    def resolve(
        self,
        district_code: Optional[str],
        constituency_code: Optional[str],
        subcounty_code: Optional[str],
        electoral_area_code: Optional[str],
    ) -> Optional[LocationHierarchy]:
        return resolver.resolve(
            self._hierarchy,
            district_code, constituency_code, subcounty_code, electoral_area_code,
        )

    def search(
        self, term: Optional[str], level: SearchLevel | str = SearchLevel.ALL,
    ) -> list[SearchResult]:
        return resolver.search(self._hierarchy, term, level)

    def get_statistics(self) -> Statistics:
        return stats.get_statistics(self._hierarchy)
