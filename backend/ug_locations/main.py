"""
main.py — FastAPI application entry point for the Uganda Location Selector.

Exposes:
    GET /                                   — health check (root)
    GET /health                             — readiness + dataset statistics
    GET /api/v1/districts                   — all districts
    GET /api/v1/constituencies              — constituencies of a district
    GET /api/v1/subcounties                 — sub-counties of a constituency
    GET /api/v1/electoral-areas             — electoral areas of a sub-county
    GET /api/v1/hierarchy/{d}/{c}/{s}/{e}   — full named path for a code chain
    GET /api/v1/hierarchy/{d}/{c}/{s}/{e}/coordinates — geocode a selection
    GET /api/v1/search                      — name search at one or all levels
    GET /api/v1/statistics                  — dataset counts
    GET /api/v1/coordinates                 — geocode free text
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ug_locations.config import settings
from ug_locations.errors import (
    GeocodingUnavailableError,
    InvalidQueryError,
    LoadError,
    NoMatchError,
    NotInitializedError,
)
from ug_locations.geocoding import GeocodingClient, build_location_query
from ug_locations.models import LocationHierarchy, SearchLevel
from ug_locations.selector import LocationSelector
from ug_locations.sources import build_source

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

# ── Application-level selector (loaded once at startup) ──────────────────────
selector: LocationSelector | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the electoral dataset before accepting requests."""
    global selector
    selector = LocationSelector(
        build_source(settings),
        geocoder=GeocodingClient.from_settings(settings),
    )
    try:
        await selector.init()
    except LoadError as exc:
        # Keep serving so /health can report the failure as 503.
        logger.error("Electoral data unavailable: %s", exc)
    yield
    logger.info("Shutting down — closing geocoder.")
    await selector.aclose()


# ── FastAPI app ───────────────────────────────────────────────────────────────
app = FastAPI(
    title="Uganda Location Selector API",
    description=(
        "Browse Uganda's districts, constituencies, sub-counties and electoral "
        "areas, and geocode a selected electoral area."
    ),
    version="1.0.4",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


# ── Error mapping ─────────────────────────────────────────────────────────────

@app.exception_handler(NotInitializedError)
async def _not_initialized(request: Request, exc: NotInitializedError):
    return JSONResponse(status_code=503, content={"detail": "Electoral data not yet loaded."})


@app.exception_handler(InvalidQueryError)
async def _invalid_query(request: Request, exc: InvalidQueryError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(NoMatchError)
async def _no_match(request: Request, exc: NoMatchError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(GeocodingUnavailableError)
async def _geocoder_down(request: Request, exc: GeocodingUnavailableError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})


def _selector() -> LocationSelector:
    if selector is None:
        raise NotInitializedError()
    return selector


def _resolve_or_404(district: str, constituency: str, subcounty: str, area: str) -> LocationHierarchy:
    location = _selector().resolve(district, constituency, subcounty, area)
    if location is None:
        raise HTTPException(
            status_code=404,
            detail=(
                f"No electoral area found for codes {district}/{constituency}/"
                f"{subcounty}/{area}."
            ),
        )
    return location


# ── Routes ────────────────────────────────────────────────────────────────────

@app.get("/", tags=["health"])
def root():
    """Root health-check endpoint."""
    return {"status": "ok", "message": "Uganda Location Selector API is running."}


@app.get("/health", tags=["health"])
def health():
    """Detailed health check: returns loaded dataset counts."""
    stats = _selector().get_statistics()
    return {"status": "ok", **stats.to_dict()}


@app.get("/api/v1/districts", tags=["lookup"])
def list_districts():
    return [d.to_dict() for d in _selector().list_districts()]


@app.get("/api/v1/constituencies", tags=["lookup"])
def list_constituencies(district: Optional[str] = Query(None)):
    """Constituencies of ``district``; empty when the code is missing or unknown."""
    return [c.to_dict() for c in _selector().list_constituencies(district)]


@app.get("/api/v1/subcounties", tags=["lookup"])
def list_sub_counties(
    district: Optional[str] = Query(None),
    constituency: Optional[str] = Query(None),
):
    return [s.to_dict() for s in _selector().list_sub_counties(district, constituency)]


@app.get("/api/v1/electoral-areas", tags=["lookup"])
def list_electoral_areas(
    district: Optional[str] = Query(None),
    constituency: Optional[str] = Query(None),
    subcounty: Optional[str] = Query(None),
):
    areas = _selector().list_electoral_areas(district, constituency, subcounty)
    return [a.to_dict() for a in areas]


@app.get(
    "/api/v1/hierarchy/{district}/{constituency}/{subcounty}/{electoral_area}",
    tags=["lookup"],
)
def get_hierarchy(district: str, constituency: str, subcounty: str, electoral_area: str):
    """
    Return the complete named path for a full chain of codes.

    Raises:
        HTTPException 404: If any code in the chain does not resolve.
    """
    return _resolve_or_404(district, constituency, subcounty, electoral_area).to_dict()


@app.get(
    "/api/v1/hierarchy/{district}/{constituency}/{subcounty}/{electoral_area}/coordinates",
    tags=["geocoding"],
)
async def get_hierarchy_coordinates(
    district: str, constituency: str, subcounty: str, electoral_area: str,
):
    """
    Geocode a fully selected electoral area.

    The query sent to the geocoder is "<electoral area>, <district>, Uganda".
    """
    location = _resolve_or_404(district, constituency, subcounty, electoral_area)
    query = build_location_query(location, settings.country)
    coords = await _selector().get_coordinates(query)
    logger.info("Geocoded %r → (%.5f, %.5f)", query, coords.lat, coords.lon)
    return {"query": query, "location": location.to_dict(), **coords.to_dict()}


@app.get("/api/v1/search", tags=["search"])
def search(
    q: str = Query("", description="Case-insensitive substring of a location name"),
    level: SearchLevel = Query(SearchLevel.ALL),
):
    return [r.to_dict() for r in _selector().search(q, level)]


@app.get("/api/v1/statistics", tags=["metadata"])
def statistics():
    return _selector().get_statistics().to_dict()


@app.get("/api/v1/coordinates", tags=["geocoding"])
async def coordinates(q: str = Query("", description="Free-text location")):
    """
    Geocode a free-text location.

    Raises:
        HTTPException 422: Empty query.
        HTTPException 404: No candidates.
        HTTPException 502: Geocoding service unavailable.
    """
    coords = await _selector().get_coordinates(q)
    return coords.to_dict()
