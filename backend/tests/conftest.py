"""
conftest.py — Shared pytest fixtures for the Uganda Location Selector test suite.

Provides:
    - A small in-memory electoral dataset mirroring the real file's schema.
    - An in-memory DocumentSource so tests never touch disk or network.
    - Loaded Hierarchy / LocationIndex fixtures built from that dataset.
"""

from __future__ import annotations

import json

import pytest

from ug_locations.index import LocationIndex
from ug_locations.loader import parse_document
from ug_locations.models import Hierarchy


class MemorySource:
    """DocumentSource serving a fixed payload and counting fetches."""

    def __init__(self, payload: bytes):
        self.payload = payload
        self.fetches = 0

    async def fetch_raw_document(self) -> bytes:
        self.fetches += 1
        return self.payload


# ── Dataset fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def sample_document() -> dict:
    """
    Two districts whose constituency, sub-county and electoral-area codes
    deliberately repeat across parents ("001" appears at every level), so
    lookups only work when performed by descent.
    """
    return {
        "districts": [
            {
                "name": "KAMPALA",
                "code": "001",
                "constituencies": [
                    {
                        "name": "KAMPALA CENTRAL DIVISION",
                        "code": "001",
                        "subcounties": [
                            {
                                "name": "CENTRAL DIVISION",
                                "code": "001",
                                "electoral_areas": [
                                    {"name": "NAKASERO", "code": "001"},
                                    {"name": "KOLOLO", "code": "002"},
                                ],
                            },
                        ],
                    },
                    {
                        "name": "KAWEMPE DIVISION NORTH",
                        "code": "002",
                        "subcounties": [
                            {
                                "name": "KAWEMPE DIVISION",
                                "code": "001",
                                "electoral_areas": [
                                    {"name": "BWAISE I", "code": "001"},
                                ],
                            },
                        ],
                    },
                ],
            },
            {
                "name": "MBARARA",
                "code": "027",
                "constituencies": [
                    {
                        "name": "KASHARI NORTH COUNTY",
                        "code": "001",
                        "subcounties": [
                            {
                                "name": "BUBAARE",
                                "code": "001",
                                "electoral_areas": [
                                    {"name": "KAGONGI", "code": "001"},
                                    {"name": "BUBAARE", "code": "002"},
                                ],
                            },
                            {
                                "name": "RUBAYA",
                                "code": "002",
                                "electoral_areas": [],
                            },
                        ],
                    },
                    {
                        "name": "MBARARA CITY NORTH",
                        "code": "002",
                        "subcounties": [
                            {
                                "name": "KAKOBA DIVISION",
                                "code": "001",
                                "electoral_areas": [
                                    {"name": "KAKOBA", "code": "001"},
                                    {"name": "KAMUKUZI", "code": "002"},
                                ],
                            },
                        ],
                    },
                ],
            },
        ]
    }


@pytest.fixture
def sample_payload(sample_document) -> bytes:
    return json.dumps(sample_document).encode("utf-8")


@pytest.fixture
def memory_source(sample_payload) -> MemorySource:
    return MemorySource(sample_payload)


@pytest.fixture
def hierarchy(sample_payload) -> Hierarchy:
    return parse_document(sample_payload)


@pytest.fixture
def index(hierarchy) -> LocationIndex:
    return LocationIndex(hierarchy)


@pytest.fixture
def make_source():
    """Factory for MemorySource instances serving an arbitrary payload."""
    return MemorySource
