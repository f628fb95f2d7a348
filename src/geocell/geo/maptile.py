"""Slippy-map tile hash.

Points are projected to Spherical Mercator the same way map tile services
address their tiles. The hash packs the zoom level into bits 56..52 and the
Morton-interleaved x/y tile indices into bits 51..0.
"""

from __future__ import annotations

from math import cos, floor, log, pi, radians, tan

import mercantile

from geocell.contracts import Rectangle, TileIndex
from geocell.errors import InvalidPrecisionError, InvalidTileIndexError, MalformedHashError
from geocell.geo.bits import deinterleave, interleave
from geocell.geo.normalize import normalize_lat, normalize_lon

MAX_ZOOM = 26
ZOOM_SHIFT = 52
TILE_MASK = (1 << ZOOM_SHIFT) - 1


def _clamp_tile(index: int, tiles: int) -> int:
    if index < 0:
        return 0
    if index >= tiles:
        return tiles - 1
    return index


def _lat_to_tile(lat: float, tiles: int) -> int:
    lat_rad = radians(lat)
    try:
        merc = log(tan(lat_rad) + 1.0 / cos(lat_rad))
    except (ValueError, ZeroDivisionError):
        # tan + sec is <= 0 or undefined only at the south pole
        return tiles - 1
    return floor((1.0 - merc / pi) / 2.0 * tiles)


def encode(longitude: float, latitude: float, zoom: int) -> int:
    """Convert [longitude, latitude] to a hash combining zoom, x, and y of the tile."""
    if zoom < 0 or zoom > MAX_ZOOM:
        raise InvalidPrecisionError("zoom")
    tiles = 1 << zoom
    lon = normalize_lon(longitude)
    lat = normalize_lat(latitude)

    xtile = _clamp_tile(floor((lon + 180.0) / 360.0 * tiles), tiles)
    ytile = _clamp_tile(_lat_to_tile(lat, tiles), tiles)

    # x and y need at most 26 bits each, zoom fits in the 5 bits above them
    return interleave(xtile, ytile) | (zoom << ZOOM_SHIFT)


def encode_tile_indices(zoom: int, x: int, y: int) -> int:
    """Build a hash directly from a tile address."""
    if zoom < 0 or zoom > MAX_ZOOM:
        raise InvalidPrecisionError("zoom")
    tiles = 1 << zoom
    if x < 0 or y < 0 or x >= tiles or y >= tiles:
        raise InvalidTileIndexError(f"tile-index {x}/{y} is outside zoom {zoom}")
    return interleave(x, y) | (zoom << ZOOM_SHIFT)


def decode_tile_indices(cell_hash: int) -> TileIndex:
    """Split a hash into its zoom level and tile indices."""
    zoom = cell_hash >> ZOOM_SHIFT
    if zoom < 0 or zoom > MAX_ZOOM:
        raise MalformedHashError("hash-zoom")

    tiles = 1 << zoom
    value = cell_hash & TILE_MASK
    xtile = deinterleave(value)
    ytile = deinterleave(value >> 1)
    if xtile >= tiles or ytile >= tiles:
        raise MalformedHashError("hash-tile")
    return TileIndex(zoom, xtile, ytile)


def decode_to_key(cell_hash: int) -> str:
    """Format a hash as "zoom/x/y"."""
    zoom, x, y = decode_tile_indices(cell_hash)
    return f"{zoom}/{x}/{y}"


def decode_to_bbox(cell_hash: int) -> Rectangle:
    """Compute the lat/lon bounds of the tile a hash addresses."""
    zoom, x, y = decode_tile_indices(cell_hash)
    bounds = mercantile.bounds(x, y, zoom)
    return Rectangle(
        min_lat=bounds.south,
        max_lat=bounds.north,
        min_lon=bounds.west,
        max_lon=bounds.east,
    )


def validate_precision(precision: int) -> None:
    """Reject zoom levels outside [0, MAX_ZOOM]."""
    if precision < 0 or precision > MAX_ZOOM:
        raise InvalidPrecisionError(
            f"Invalid maptile precision of {precision}. Must be between 0 and {MAX_ZOOM}."
        )
