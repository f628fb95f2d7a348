"""Tests for the plus code hash."""

from __future__ import annotations

import math

import pytest

from geocell.contracts import Rectangle
from geocell.errors import (
    InvalidCharacterError,
    InvalidCoordinateError,
    InvalidPrecisionError,
    MalformedHashError,
)
from geocell.geo import pluscode

# digit values of "8FVC" in the 21-symbol packing alphabet
_8FVC = ((7 * 21 + 10) * 21 + 18) * 21 + 9


class _FakeBackend:
    """Backend returning canned values and recording decode calls."""

    def __init__(self, code: str) -> None:
        self.code = code
        self.decoded: list[str] = []

    def encode(self, lat: float, lon: float, length: int) -> str:
        return self.code

    def decode(self, code: str) -> Rectangle:
        self.decoded.append(code)
        return Rectangle(min_lat=1.0, max_lat=2.0, min_lon=3.0, max_lon=4.0)


def test_encode_pluscode_uses_zero_padding_for_short_codes() -> None:
    """Short codes are padded with '0' up to the separator."""
    assert pluscode.encode_pluscode(8.0, 47.0, 4) == "8FVC0000+"
    assert pluscode.encode_pluscode(8.0, 47.0, 8) == "8FVC2222+"


def test_pack_pluscode_reads_base21() -> None:
    """Packing skips the separator and keeps padding zeros."""
    assert pluscode.pack_pluscode("8FVC0000+") == _8FVC * 21**4
    assert pluscode.pack_pluscode("8FVC2222+") == ((((_8FVC * 21 + 1) * 21 + 1) * 21 + 1) * 21 + 1)


def test_encode_known_value() -> None:
    """A length-4 code packs to its base-21 value."""
    cell_hash = pluscode.encode(8.0, 47.0, 4)

    assert cell_hash == _8FVC * 21**4
    assert pluscode.decode_to_key(cell_hash) == "8FVC0000+"


@pytest.mark.parametrize("length", [4, 6, 8, 10, 11, 12, 13, 14])
def test_key_round_trip_keeps_code(length: int) -> None:
    """Decoding restores the generated code with the separator at position 8."""
    lon, lat = 126.978, 37.5665
    code = pluscode.encode_pluscode(lon, lat, length)
    key = pluscode.decode_to_key(pluscode.encode(lon, lat, length))

    assert key == code
    assert len(key) == len(code)
    assert key.index("+") == 8


def test_hash_fits_signed_64_bits() -> None:
    """The longest supported code stays below 2**63."""
    assert pluscode.encode(179.99, 89.99, 14) < 2**63
    assert pluscode.MAX_HASH < 2**63


def test_decode_to_bbox_contains_point() -> None:
    """The decoded area contains the encoded point."""
    lon, lat = -122.084, 37.422
    bbox = pluscode.decode_to_bbox(pluscode.encode(lon, lat, 10))

    assert bbox.min_lat <= lat <= bbox.max_lat
    assert bbox.min_lon <= lon <= bbox.max_lon
    assert bbox.max_lat - bbox.min_lat == pytest.approx(0.000125)


def test_decode_to_bbox_for_padded_code() -> None:
    """Zero-padded codes decode to their coarse cell."""
    bbox = pluscode.decode_to_bbox(pluscode.encode(8.0, 47.0, 4))

    assert bbox.min_lat == pytest.approx(47.0)
    assert bbox.max_lat == pytest.approx(48.0)
    assert bbox.min_lon == pytest.approx(8.0)
    assert bbox.max_lon == pytest.approx(9.0)


def test_backend_can_be_swapped() -> None:
    """Encode and bbox decode go through the supplied backend."""
    backend = _FakeBackend("8FVC0000+")
    cell_hash = pluscode.encode(0.0, 0.0, 4, backend=backend)
    bbox = pluscode.decode_to_bbox(cell_hash, backend=backend)

    assert cell_hash == _8FVC * 21**4
    assert backend.decoded == ["8FVC0000+"]
    assert bbox == Rectangle(min_lat=1.0, max_lat=2.0, min_lon=3.0, max_lon=4.0)


def test_encode_rejects_unknown_character() -> None:
    """Characters outside the alphabet are named in the error."""
    with pytest.raises(InvalidCharacterError, match="'I'"):
        pluscode.encode(0.0, 0.0, 8, backend=_FakeBackend("8FVC22I2+"))
    with pytest.raises(InvalidCharacterError, match="'a'"):
        pluscode.pack_pluscode("8FVa2222+")


def test_decode_rejects_degenerate_hashes() -> None:
    """Zero, negative, oversized and too-short hashes are malformed."""
    with pytest.raises(MalformedHashError, match="empty hash"):
        pluscode.decode_to_key(0)
    with pytest.raises(MalformedHashError):
        pluscode.decode_to_key(-5)
    with pytest.raises(MalformedHashError):
        pluscode.decode_to_key(21**14)
    with pytest.raises(MalformedHashError, match="at least 8"):
        pluscode.decode_to_key(5)


def test_encode_rejects_invalid_length() -> None:
    """Encoding validates the code length first."""
    with pytest.raises(InvalidPrecisionError):
        pluscode.encode(0.0, 0.0, 5)
    with pytest.raises(InvalidPrecisionError):
        pluscode.encode(0.0, 0.0, 15)


@pytest.mark.parametrize("precision", [4, 6, 8, 9, 13, 14])
def test_validate_precision_accepts(precision: int) -> None:
    """Even lengths from 4 and every length from 8 to 14 are valid."""
    pluscode.validate_precision(precision)


@pytest.mark.parametrize("precision", [3, 5, 7, 15, -1])
def test_validate_precision_rejects(precision: int) -> None:
    """Lengths outside 4..14 or odd below 8 are rejected."""
    with pytest.raises(InvalidPrecisionError, match="must be even if less than 8"):
        pluscode.validate_precision(precision)


def test_encode_reports_backend_length_rejection_as_precision_error() -> None:
    """A length the backend refuses surfaces as an invalid precision."""

    class _Refusing(_FakeBackend):
        def encode(self, lat: float, lon: float, length: int) -> str:
            raise ValueError(f"Invalid Open Location Code length - {length}")

    with pytest.raises(InvalidPrecisionError, match="length 9 rejected"):
        pluscode.encode(0.0, 0.0, 9, backend=_Refusing("unused"))


def test_encode_normalizes_longitude_before_backend() -> None:
    """Out-of-range longitudes wrap, even when far beyond one turn."""
    assert pluscode.encode(190.0, 10.0, 10) == pluscode.encode(-170.0, 10.0, 10)
    # 1e20 is 280 modulo 360, so it wraps to 100 degrees east
    assert pluscode.encode(1e20, 10.0, 10) == pluscode.encode(100.0, 10.0, 10)
    assert pluscode.encode_pluscode(1e20, 10.0, 10) == pluscode.encode_pluscode(100.0, 10.0, 10)


def test_encode_clamps_latitude() -> None:
    """Latitudes beyond the poles clamp to them."""
    assert pluscode.encode(10.0, 95.0, 8) == pluscode.encode(10.0, 90.0, 8)


@pytest.mark.parametrize(
    ("lon", "lat"), [(math.inf, 10.0), (-math.inf, 10.0), (math.nan, 10.0), (10.0, math.nan)]
)
def test_encode_rejects_non_finite_coordinates(lon: float, lat: float) -> None:
    """Non-finite coordinates fail as coordinate errors, not precision errors."""
    with pytest.raises(InvalidCoordinateError, match="must be finite"):
        pluscode.encode(lon, lat, 10)
