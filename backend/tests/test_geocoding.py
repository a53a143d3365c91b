"""
test_geocoding.py — Unit tests for GeocodingClient.

The mock_geocoder fixture intercepts httpx.AsyncClient calls at the transport
level via respx; no live Nominatim requests are made.

Coverage:
    - Empty query rejected before any request
    - Best-match parsing and request parameters
    - NoMatchError on an empty result array
    - GeocodingUnavailableError on transport / payload failures, no retry
    - Settings wiring, query composition, selector delegation
"""

from __future__ import annotations

import httpx
import pytest
import respx

from ug_locations.config import Settings
from ug_locations.errors import (
    GeocodingUnavailableError,
    InvalidQueryError,
    NoMatchError,
)
from ug_locations.geocoding import GeocodingClient, build_location_query
from ug_locations.models import Coordinates, LocationHierarchy, LocationRef
from ug_locations.selector import LocationSelector

GEOCODER_URL = "https://geocoder.test/search"


def _make_client() -> GeocodingClient:
    return GeocodingClient(GEOCODER_URL, user_agent="ug-tests/0.1")


@pytest.fixture
def mock_geocoder():
    with respx.mock(assert_all_called=False) as mock:
        yield mock


# ════════════════════════════════════════════════════════════════
#  Query validation
# ════════════════════════════════════════════════════════════════

class TestGetCoordinatesValidation:
    @pytest.mark.asyncio
    async def test_empty_query_raises_before_any_request(self, mock_geocoder):
        route = mock_geocoder.get(GEOCODER_URL)
        async with _make_client() as client:
            with pytest.raises(InvalidQueryError):
                await client.get_coordinates("")
        assert not route.called

    def test_invalid_query_is_a_value_error(self):
        assert issubclass(InvalidQueryError, ValueError)


# ════════════════════════════════════════════════════════════════
#  Successful lookups
# ════════════════════════════════════════════════════════════════

class TestGetCoordinatesSuccess:
    @pytest.mark.asyncio
    async def test_single_result_is_parsed(self, mock_geocoder):
        mock_geocoder.get(GEOCODER_URL).mock(
            return_value=httpx.Response(
                200, json=[{"lat": "0.3", "lon": "32.6", "display_name": "X"}]
            )
        )
        async with _make_client() as client:
            coords = await client.get_coordinates("Kampala, Uganda")

        assert coords == Coordinates(lat=0.3, lon=32.6, display_name="X")

    @pytest.mark.asyncio
    async def test_request_carries_query_format_and_limit(self, mock_geocoder):
        route = mock_geocoder.get(GEOCODER_URL).mock(
            return_value=httpx.Response(
                200, json=[{"lat": "-0.6", "lon": "30.65", "display_name": "Kakoba"}]
            )
        )
        async with _make_client() as client:
            await client.get_coordinates("Kakoba, Mbarara, Uganda")

        request = route.calls.last.request
        assert request.url.params["q"] == "Kakoba, Mbarara, Uganda"
        assert request.url.params["format"] == "json"
        assert request.url.params["limit"] == "1"
        assert request.headers["User-Agent"] == "ug-tests/0.1"


# ════════════════════════════════════════════════════════════════
#  Failure contract
# ════════════════════════════════════════════════════════════════

class TestGetCoordinatesFailures:
    @pytest.mark.asyncio
    async def test_empty_result_raises_no_match(self, mock_geocoder):
        mock_geocoder.get(GEOCODER_URL).mock(return_value=httpx.Response(200, json=[]))
        async with _make_client() as client:
            with pytest.raises(NoMatchError) as excinfo:
                await client.get_coordinates("Atlantis")
        assert excinfo.value.query == "Atlantis"

    @pytest.mark.asyncio
    async def test_server_error_raises_unavailable(self, mock_geocoder):
        mock_geocoder.get(GEOCODER_URL).mock(return_value=httpx.Response(503))
        async with _make_client() as client:
            with pytest.raises(GeocodingUnavailableError):
                await client.get_coordinates("Gulu")

    @pytest.mark.asyncio
    async def test_server_error_is_not_retried(self, mock_geocoder):
        route = mock_geocoder.get(GEOCODER_URL).mock(return_value=httpx.Response(500))
        async with _make_client() as client:
            with pytest.raises(GeocodingUnavailableError):
                await client.get_coordinates("Gulu")
        assert route.call_count == 1

    @pytest.mark.asyncio
    async def test_network_error_raises_unavailable(self, mock_geocoder):
        mock_geocoder.get(GEOCODER_URL).mock(side_effect=httpx.ConnectError("refused"))
        async with _make_client() as client:
            with pytest.raises(GeocodingUnavailableError):
                await client.get_coordinates("Gulu")

    @pytest.mark.asyncio
    async def test_non_json_body_raises_unavailable(self, mock_geocoder):
        mock_geocoder.get(GEOCODER_URL).mock(
            return_value=httpx.Response(200, content=b"<html>rate limited</html>")
        )
        async with _make_client() as client:
            with pytest.raises(GeocodingUnavailableError):
                await client.get_coordinates("Gulu")

    @pytest.mark.asyncio
    async def test_non_list_body_raises_unavailable(self, mock_geocoder):
        mock_geocoder.get(GEOCODER_URL).mock(
            return_value=httpx.Response(200, json={"error": "bad request"})
        )
        async with _make_client() as client:
            with pytest.raises(GeocodingUnavailableError):
                await client.get_coordinates("Gulu")

    MALFORMED_CANDIDATES = [
        ({"lon": "32.6", "display_name": "X"}, "missing lat"),
        ({"lat": "north", "lon": "32.6", "display_name": "X"}, "non-numeric lat"),
        ({"lat": None, "lon": "32.6", "display_name": "X"}, "null lat"),
    ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("candidate,description", MALFORMED_CANDIDATES)
    async def test_malformed_candidate_raises_unavailable(self, mock_geocoder, candidate, description):
        mock_geocoder.get(GEOCODER_URL).mock(return_value=httpx.Response(200, json=[candidate]))
        async with _make_client() as client:
            with pytest.raises(GeocodingUnavailableError):
                await client.get_coordinates("Gulu")


# ════════════════════════════════════════════════════════════════
#  Wiring helpers
# ════════════════════════════════════════════════════════════════

class TestGeocodingWiring:
    def test_from_settings_uses_configured_url(self):
        client = GeocodingClient.from_settings(Settings(geocoder_url=GEOCODER_URL))
        assert client.url == GEOCODER_URL

    def test_build_location_query(self):
        location = LocationHierarchy(
            district=LocationRef("MBARARA", "027"),
            constituency=LocationRef("MBARARA CITY NORTH", "002"),
            sub_county=LocationRef("KAKOBA DIVISION", "001"),
            electoral_area=LocationRef("KAKOBA", "001"),
        )
        assert build_location_query(location) == "KAKOBA, MBARARA, Uganda"
        assert build_location_query(location, "UG") == "KAKOBA, MBARARA, UG"

    @pytest.mark.asyncio
    async def test_selector_geocodes_without_init(self, mock_geocoder, memory_source):
        mock_geocoder.get(GEOCODER_URL).mock(
            return_value=httpx.Response(
                200, json=[{"lat": "2.77", "lon": "32.3", "display_name": "Gulu"}]
            )
        )
        selector = LocationSelector(memory_source, geocoder=_make_client())
        try:
            coords = await selector.get_coordinates("Gulu, Uganda")
        finally:
            await selector.aclose()
        assert coords.lat == pytest.approx(2.77)
        assert selector.initialized is False
