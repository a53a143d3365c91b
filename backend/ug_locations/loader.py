"""
loader.py — Data loading utilities for the Uganda location selector.

Responsible for:
    - Pulling the raw electoral dataset from a DocumentSource.
    - Validating its nested shape (districts → constituencies → subcounties
      → electoral_areas, each entry carrying ``name`` and ``code``).
    - Building the immutable Hierarchy tree used throughout the application.
"""

from __future__ import annotations

import json
import logging

from ug_locations.errors import LoadError
from ug_locations.index import LocationIndex
from ug_locations.models import (
    Constituency,
    District,
    ElectoralArea,
    Hierarchy,
    SubCounty,
)
from ug_locations.sources import DocumentSource
from ug_locations.stats import get_statistics

logger = logging.getLogger(__name__)


# ── Shape validation ─────────────────────────────────────────────────────────

def _require_list(container: dict, key: str, where: str) -> list:
    value = container.get(key)
    if not isinstance(value, list):
        raise LoadError(f"{where}: expected a '{key}' list, got {type(value).__name__}")
    return value


def _require_entry(entry: object, where: str) -> tuple[str, str]:
    """Return ``(name, code)`` from an entry, rejecting anything malformed."""
    if not isinstance(entry, dict):
        raise LoadError(f"{where}: expected an object, got {type(entry).__name__}")
    name = entry.get("name")
    code = entry.get("code")
    if not isinstance(name, str) or not isinstance(code, str):
        raise LoadError(f"{where}: 'name' and 'code' must both be strings")
    return name, code


# ── Tree construction ────────────────────────────────────────────────────────

def _build_electoral_area(entry: object, where: str) -> ElectoralArea:
    name, code = _require_entry(entry, where)
    return ElectoralArea(name=name, code=code)


def _build_subcounty(entry: object, where: str) -> SubCounty:
    name, code = _require_entry(entry, where)
    areas = _require_list(entry, "electoral_areas", where)
    return SubCounty(
        name=name,
        code=code,
        electoral_areas=tuple(
            _build_electoral_area(area, f"{where}.electoral_areas[{i}]")
            for i, area in enumerate(areas)
        ),
    )


def _build_constituency(entry: object, where: str) -> Constituency:
    name, code = _require_entry(entry, where)
    subcounties = _require_list(entry, "subcounties", where)
    return Constituency(
        name=name,
        code=code,
        subcounties=tuple(
            _build_subcounty(sub, f"{where}.subcounties[{i}]")
            for i, sub in enumerate(subcounties)
        ),
    )


def _build_district(entry: object, where: str) -> District:
    name, code = _require_entry(entry, where)
    constituencies = _require_list(entry, "constituencies", where)
    return District(
        name=name,
        code=code,
        constituencies=tuple(
            _build_constituency(con, f"{where}.constituencies[{i}]")
            for i, con in enumerate(constituencies)
        ),
    )


def parse_document(raw: bytes | str) -> Hierarchy:
    """
    Parse a raw dataset document into an immutable Hierarchy.

    Args:
        raw: The undecoded JSON document (bytes or text).

    Returns:
        Hierarchy with every district, in source order.

    Raises:
        LoadError: If the document is not valid UTF-8 JSON or does not have
                   the expected nested shape.
    """
    try:
        document = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise LoadError(f"Dataset is not valid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise LoadError("Dataset root must be an object with a 'districts' list")

    districts = _require_list(document, "districts", "root")
    return Hierarchy(
        districts=tuple(
            _build_district(entry, f"districts[{i}]")
            for i, entry in enumerate(districts)
        )
    )


async def load_hierarchy(source: DocumentSource) -> LocationIndex:
    """
    Fetch the dataset from ``source`` and return a loaded LocationIndex.

    This is the single I/O step behind ``LocationSelector.init()``.

    Raises:
        LoadError: If the source is unreachable or the payload is malformed.
    """
    try:
        raw = await source.fetch_raw_document()
        hierarchy = parse_document(raw)
    except LoadError as exc:
        logger.error("Failed to load electoral data from %r: %s", source, exc)
        raise

    stats = get_statistics(hierarchy)
    logger.info(
        "Loaded %d districts, %d constituencies, %d sub-counties, %d electoral areas",
        stats.districts, stats.constituencies, stats.sub_counties, stats.electoral_areas,
    )
    return LocationIndex(hierarchy)
