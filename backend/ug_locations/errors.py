"""
errors.py — Exception taxonomy for the location selector.

Lookups never raise for "not found"; only loading, sequencing and geocoding
failures surface as exceptions. Nothing here is retried internally.
"""

from __future__ import annotations


class LocationSelectorError(Exception):
    """Base class for every error raised by this package."""


class LoadError(LocationSelectorError):
    """The dataset source was unreachable or the payload was malformed."""


class NotInitializedError(LocationSelectorError):
    """A lookup was attempted before a successful ``init()``."""

    def __init__(self, message: str = "LocationSelector must be initialised first; await selector.init()"):
        super().__init__(message)


class InvalidQueryError(LocationSelectorError, ValueError):
    """Geocoding was asked for an empty location string."""


class NoMatchError(LocationSelectorError):
    """The geocoding service returned zero candidates."""

    def __init__(self, query: str):
        super().__init__(f"No coordinates found for location: {query}")
        self.query = query


class GeocodingUnavailableError(LocationSelectorError):
    """The geocoding service could not be reached or returned garbage."""
