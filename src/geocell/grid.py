"""Hash-type dispatch and point-to-cell aggregation."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from geocell.contracts import CellBucket, GeoPoint, HashType, Rectangle
from geocell.errors import GeoCellError, UnknownHashTypeError
from geocell.geo import maptile, pluscode

logger = logging.getLogger(__name__)

DEFAULT_TYPE = HashType.MAPTILE
DEFAULT_PRECISION = 5
DEFAULT_MAX_NUM_CELLS = 10_000


def resolve_hash_type(value: str | HashType) -> HashType:
    """Parse a hash type name, case-insensitively."""
    try:
        return HashType(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(t.value for t in HashType)
        raise UnknownHashTypeError(f"unknown hash type {value!r}; expected one of: {choices}") from exc


def check_precision_range(precision: int, hash_type: str | HashType) -> None:
    """Validate precision for the selected hash type."""
    resolved = resolve_hash_type(hash_type)
    if resolved is HashType.MAPTILE:
        maptile.validate_precision(precision)
    else:
        pluscode.validate_precision(precision)


def encode_cell(point: GeoPoint, hash_type: str | HashType, precision: int) -> int:
    """Return the cell hash containing `point`."""
    if resolve_hash_type(hash_type) is HashType.MAPTILE:
        return maptile.encode(point.lon, point.lat, precision)
    return pluscode.encode(point.lon, point.lat, precision)


def cell_key(cell_hash: int, hash_type: str | HashType) -> str:
    """Return the human-readable key of a cell hash."""
    if resolve_hash_type(hash_type) is HashType.MAPTILE:
        return maptile.decode_to_key(cell_hash)
    return pluscode.decode_to_key(cell_hash)


def cell_bbox(cell_hash: int, hash_type: str | HashType) -> Rectangle:
    """Return the bounding rectangle of a cell hash."""
    if resolve_hash_type(hash_type) is HashType.MAPTILE:
        return maptile.decode_to_bbox(cell_hash)
    return pluscode.decode_to_bbox(cell_hash)


def cell_values(points: Iterable[GeoPoint], hash_type: str | HashType, precision: int) -> list[int]:
    """Return sorted cell hashes for the points of one document, duplicates kept."""
    resolved = resolve_hash_type(hash_type)
    return sorted(encode_cell(point, resolved, precision) for point in points)


def aggregate(
    points: Iterable[GeoPoint],
    hash_type: str | HashType = DEFAULT_TYPE,
    precision: int = DEFAULT_PRECISION,
    size: int = DEFAULT_MAX_NUM_CELLS,
) -> list[CellBucket]:
    """Count points per cell and return the `size` most populated cells.

    Buckets are ordered by descending count, ties broken by ascending hash.
    """
    if size < 1:
        raise GeoCellError(f"size must be >= 1, got {size}")
    resolved = resolve_hash_type(hash_type)
    check_precision_range(precision, resolved)

    hashes = np.fromiter(
        (encode_cell(point, resolved, precision) for point in points), dtype=np.int64
    )
    if hashes.size == 0:
        logger.debug("aggregate: no points for %s precision=%d", resolved, precision)
        return []

    unique, counts = np.unique(hashes, return_counts=True)
    order = np.lexsort((unique, -counts))[:size]
    logger.debug(
        "aggregate: %d points into %d cells (%s precision=%d, returning %d)",
        hashes.size,
        unique.size,
        resolved,
        precision,
        order.size,
    )

    buckets: list[CellBucket] = []
    for idx in order:
        cell_hash = int(unique[idx])
        buckets.append(
            CellBucket(
                hash=cell_hash,
                key=cell_key(cell_hash, resolved),
                count=int(counts[idx]),
                bbox=cell_bbox(cell_hash, resolved),
            )
        )
    return buckets
