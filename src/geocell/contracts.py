"""Value types shared by the cell-hash codecs and the grid layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, NamedTuple


class HashType(StrEnum):
    """Supported cell-hash encodings."""

    MAPTILE = "maptile"
    PLUSCODE = "pluscode"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """WGS84 point in degrees."""

    lon: float
    lat: float


@dataclass(frozen=True, slots=True)
class Rectangle:
    """Geographic extent of one grid cell."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, other: Rectangle, tol: float = 1e-9) -> bool:
        """Return True when `other` lies inside this rectangle within `tol` degrees."""
        return (
            self.min_lat - tol <= other.min_lat
            and other.max_lat <= self.max_lat + tol
            and self.min_lon - tol <= other.min_lon
            and other.max_lon <= self.max_lon + tol
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "min_lat": self.min_lat,
            "max_lat": self.max_lat,
            "min_lon": self.min_lon,
            "max_lon": self.max_lon,
        }


class TileIndex(NamedTuple):
    """Slippy-map tile address."""

    zoom: int
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class CellBucket:
    """One aggregated grid cell."""

    hash: int
    key: str
    count: int
    bbox: Rectangle

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable payload."""
        return {
            "hash": self.hash,
            "key": self.key,
            "count": self.count,
            "bbox": self.bbox.to_dict(),
        }
