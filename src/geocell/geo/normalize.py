"""Longitude/latitude normalization shared by the codecs."""

from __future__ import annotations

from math import isfinite

from geocell.errors import InvalidCoordinateError


def normalize_lon(lon: float) -> float:
    """Wrap longitude into [-180, 180)."""
    if not isfinite(lon):
        raise InvalidCoordinateError(f"longitude must be finite, got {lon}")
    if -180.0 <= lon < 180.0:
        return lon
    return ((lon + 180.0) % 360.0) - 180.0


def normalize_lat(lat: float) -> float:
    """Clamp latitude into [-90, 90]."""
    if not isfinite(lat):
        raise InvalidCoordinateError(f"latitude must be finite, got {lat}")
    return max(-90.0, min(90.0, lat))
