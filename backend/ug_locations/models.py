"""
models.py — Immutable data model for the Uganda electoral hierarchy.

The tree has four strictly nested levels:

    District → Constituency → SubCounty → ElectoralArea

Codes are only unique among siblings (district codes are the one exception,
being unique country-wide), so every node is addressed by descending from its
district. Children are stored as tuples to preserve source order and to keep
the tree read-only once loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# ── Tree nodes ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ElectoralArea:
    name: str
    code: str


@dataclass(frozen=True)
class SubCounty:
    name: str
    code: str
    electoral_areas: tuple[ElectoralArea, ...] = ()


@dataclass(frozen=True)
class Constituency:
    name: str
    code: str
    subcounties: tuple[SubCounty, ...] = ()


@dataclass(frozen=True)
class District:
    name: str
    code: str
    constituencies: tuple[Constituency, ...] = ()


# ── Result values ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LocationRef:
    """A ``{name, code}`` pair, the unit returned by every list operation."""
    name: str
    code: str

    @classmethod
    def of(cls, node) -> "LocationRef":
        return cls(name=node.name, code=node.code)

    def to_dict(self) -> dict:
        return {"name": self.name, "code": self.code}


@dataclass(frozen=True)
class LocationHierarchy:
    """The complete named path from a district down to one electoral area."""
    district: LocationRef
    constituency: LocationRef
    sub_county: LocationRef
    electoral_area: LocationRef

    def to_dict(self) -> dict:
        return {
            "district": self.district.to_dict(),
            "constituency": self.constituency.to_dict(),
            "subCounty": self.sub_county.to_dict(),
            "electoralArea": self.electoral_area.to_dict(),
        }


class SearchLevel(str, Enum):
    DISTRICT = "district"
    CONSTITUENCY = "constituency"
    SUBCOUNTY = "subcounty"
    ELECTORAL_AREA = "electoral_area"
    ALL = "all"


@dataclass(frozen=True)
class SearchResult:
    """
    One search hit.

    Ancestor fields are populated down to the matched level; deeper fields
    stay ``None``. ``type`` names the level the hit was matched at.
    """
    type: SearchLevel
    district: LocationRef
    constituency: Optional[LocationRef] = None
    sub_county: Optional[LocationRef] = None
    electoral_area: Optional[LocationRef] = None

    def to_dict(self) -> dict:
        record: dict = {"type": self.type.value, "district": self.district.to_dict()}
        if self.constituency is not None:
            record["constituency"] = self.constituency.to_dict()
        if self.sub_county is not None:
            record["subCounty"] = self.sub_county.to_dict()
        if self.electoral_area is not None:
            record["electoralArea"] = self.electoral_area.to_dict()
        return record


@dataclass(frozen=True)
class Statistics:
    districts: int = 0
    constituencies: int = 0
    sub_counties: int = 0
    electoral_areas: int = 0

    def to_dict(self) -> dict:
        return {
            "districts": self.districts,
            "constituencies": self.constituencies,
            "subCounties": self.sub_counties,
            "electoralAreas": self.electoral_areas,
        }


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float
    display_name: str

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lon": self.lon, "display_name": self.display_name}


@dataclass(frozen=True)
class Hierarchy:
    """Root of the loaded tree."""
    districts: tuple[District, ...] = field(default_factory=tuple)
