"""GeocodingClient — resolves free-text place names to coordinates via Nominatim.

Usage::

    from ug_locations.config import settings
    from ug_locations.geocoding import GeocodingClient

    async with GeocodingClient.from_settings(settings) as geocoder:
        coords = await geocoder.get_coordinates("Kakoba, Mbarara, Uganda")

Error contract
--------------
- Empty query raises InvalidQueryError before any request is made.
- An empty result array raises NoMatchError.
- Network errors, non-2xx replies and unparseable bodies raise
  GeocodingUnavailableError.
- Nothing is retried, and no timeout is imposed unless one is configured;
  callers wanting a deadline wrap the call in ``asyncio.wait_for``.
"""
from __future__ import annotations

import logging

import httpx

from ug_locations.config import Settings
from ug_locations.errors import (
    GeocodingUnavailableError,
    InvalidQueryError,
    NoMatchError,
)
from ug_locations.models import Coordinates, LocationHierarchy

logger = logging.getLogger(__name__)

DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_USER_AGENT = "UgandaLocationSelector/1.0"


def build_location_query(location: LocationHierarchy, country: str = "Uganda") -> str:
    """Compose the ``"<electoral area>, <district>, <country>"`` search string."""
    return f"{location.electoral_area.name}, {location.district.name}, {country}"


class GeocodingClient:
    """Async best-match client for a Nominatim-compatible search endpoint.

    Owns its httpx.AsyncClient unless one is passed in, so it should be used
    as an async context manager (or closed with ``aclose``).
    """

    def __init__(
        self,
        url: str = DEFAULT_GEOCODER_URL,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": user_agent},
            timeout=timeout,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeocodingClient":
        return cls(
            settings.geocoder_url,
            user_agent=settings.geocoder_user_agent,
            timeout=settings.geocoder_timeout,
        )

    async def __aenter__(self) -> "GeocodingClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get_coordinates(self, query: str) -> Coordinates:
        """Return the best-matching coordinates for ``query``.

        Raises:
            InvalidQueryError: ``query`` is empty.
            NoMatchError: the service found nothing.
            GeocodingUnavailableError: transport or payload failure.
        """
        if not query:
            raise InvalidQueryError("Location name is required")

        params = {"q": query, "format": "json", "limit": 1}
        try:
            response = await self._client.get(self.url, params=params)
            response.raise_for_status()
            candidates = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Geocoding request for %r failed: %s", query, exc)
            raise GeocodingUnavailableError(f"Geocoding service unavailable: {exc}") from exc
        except ValueError as exc:
            logger.warning("Geocoding response for %r is not JSON: %s", query, exc)
            raise GeocodingUnavailableError("Geocoding service returned invalid JSON") from exc

        if not isinstance(candidates, list):
            raise GeocodingUnavailableError(
                f"Unexpected geocoding payload of type {type(candidates).__name__}"
            )
        if not candidates:
            logger.info("No coordinates found for %r", query)
            raise NoMatchError(query)

        best = candidates[0]
        try:
            return Coordinates(
                lat=float(best["lat"]),
                lon=float(best["lon"]),
                display_name=str(best["display_name"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed geocoding result for %r: %r", query, best)
            raise GeocodingUnavailableError(f"Malformed geocoding result: {exc}") from exc
