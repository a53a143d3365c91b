"""
selector.py — Public entry point: the two-state location selector.

A LocationSelector starts Unloaded, holding only its configuration (a
DocumentSource and a geocoder). ``await selector.init()`` swaps in a Loaded
LocationIndex. Code that already holds a LocationIndex (``selector.index``
after init, or the return value of ``init()``) never needs a readiness check;
the selector's own lookup methods raise NotInitializedError while Unloaded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from ug_locations.errors import NotInitializedError
from ug_locations.geocoding import GeocodingClient
from ug_locations.index import LocationIndex
from ug_locations.loader import load_hierarchy
from ug_locations.models import (
    Coordinates,
    LocationHierarchy,
    LocationRef,
    SearchLevel,
    SearchResult,
    Statistics,
)
from ug_locations.sources import DocumentSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unloaded:
    source: DocumentSource


@dataclass(frozen=True)
class Loaded:
    source: DocumentSource
    index: LocationIndex


SelectorState = Union[Unloaded, Loaded]


class LocationSelector:
    """Hierarchical district → electoral-area lookups plus geocoding."""

    def __init__(self, source: DocumentSource, geocoder: Optional[GeocodingClient] = None):
        self._state: SelectorState = Unloaded(source)
        self._geocoder = geocoder

    @property
    def initialized(self) -> bool:
        return isinstance(self._state, Loaded)

    @property
    def index(self) -> LocationIndex:
        state = self._state
        if not isinstance(state, Loaded):
            raise NotInitializedError()
        return state.index

    async def init(self) -> LocationIndex:
        """
        Load the dataset and move to the Loaded state.

        Calling again re-fetches and replaces the loaded tree. On failure the
        previous state is left untouched and LoadError propagates.
        """
        index = await load_hierarchy(self._state.source)
        self._state = Loaded(source=self._state.source, index=index)
        logger.info("Uganda location selector initialised")
        return index

    # ── Lookups (require init) ───────────────────────────────────────────────

    def list_districts(self) -> list[LocationRef]:
        return self.index.list_districts()

    def list_constituencies(self, district_code: Optional[str]) -> list[LocationRef]:
        return self.index.list_constituencies(district_code)

    def list_sub_counties(
        self, district_code: Optional[str], constituency_code: Optional[str],
    ) -> list[LocationRef]:
        return self.index.list_sub_counties(district_code, constituency_code)

    def list_electoral_areas(
        self,
        district_code: Optional[str],
        constituency_code: Optional[str],
        subcounty_code: Optional[str],
    ) -> list[LocationRef]:
        return self.index.list_electoral_areas(district_code, constituency_code, subcounty_code)

    def resolve(
        self,
        district_code: Optional[str],
        constituency_code: Optional[str],
        subcounty_code: Optional[str],
        electoral_area_code: Optional[str],
    ) -> Optional[LocationHierarchy]:
        return self.index.resolve(
            district_code, constituency_code, subcounty_code, electoral_area_code,
        )

    def search(
        self, term: Optional[str], level: SearchLevel | str = SearchLevel.ALL,
    ) -> list[SearchResult]:
        return self.index.search(term, level)

    def get_statistics(self) -> Statistics:
        return self.index.get_statistics()

    # ── Geocoding (independent of the tree) ──────────────────────────────────

    async def get_coordinates(self, query: str) -> Coordinates:
        if self._geocoder is None:
            self._geocoder = GeocodingClient()
        return await self._geocoder.get_coordinates(query)

    async def aclose(self) -> None:
        if self._geocoder is not None:
            await self._geocoder.aclose()
