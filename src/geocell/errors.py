"""Exception taxonomy for cell-hash encoding and decoding."""

from __future__ import annotations


class GeoCellError(ValueError):
    """Base class for every geocell validation failure."""


class InvalidPrecisionError(GeoCellError):
    """Precision outside the range a codec supports."""


class MalformedHashError(GeoCellError):
    """Hash that no codec could have produced."""


class InvalidCharacterError(GeoCellError):
    """Plus code character outside the packing alphabet."""

    def __init__(self, char: str) -> None:
        super().__init__(f"Character '{char}' is not a valid plus code")
        self.char = char


class UnknownHashTypeError(GeoCellError):
    """Hash type the grid layer cannot dispatch."""


class InvalidCoordinateError(GeoCellError):
    """Longitude or latitude that is not a finite number."""


class InvalidTileIndexError(GeoCellError):
    """Tile x/y outside the range of its zoom level."""
