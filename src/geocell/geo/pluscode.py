"""Plus code (Open Location Code) hash.

The code string comes from an Open Location Code backend; the hash is that
string, separator removed, read as a base-21 number. The packing alphabet is
the official 20-symbol alphabet plus '0', so the zero padding of short codes
survives the round trip.
"""

from __future__ import annotations

from typing import Protocol

from openlocationcode import openlocationcode as olc

from geocell.contracts import Rectangle
from geocell.errors import InvalidCharacterError, InvalidPrecisionError, MalformedHashError
from geocell.geo.normalize import normalize_lat, normalize_lon

# 21**14 is the largest power of the alphabet size that fits a signed 64-bit long
MAX_LENGTH = 14
MIN_LENGTH = 4
NORMAL_LENGTH = 8

SEPARATOR = "+"
SEPARATOR_POSITION = 8

ALPHABET0 = "023456789CFGHJMPQRVWX"
ALPHABET0_SIZE = len(ALPHABET0)
_ALPHABET0_LOOKUP: dict[str, int] = {ch: i for i, ch in enumerate(ALPHABET0)}

MAX_HASH = ALPHABET0_SIZE**MAX_LENGTH - 1


class LocationCodeBackend(Protocol):
    """Open Location Code encode/decode capability."""

    def encode(self, lat: float, lon: float, length: int) -> str:
        """Return the plus code of `length` digits for a WGS84 point."""

    def decode(self, code: str) -> Rectangle:
        """Return the area a full plus code covers."""


class OpenLocationCodeBackend:
    """Backend built on the reference `openlocationcode` library."""

    def encode(self, lat: float, lon: float, length: int) -> str:
        return olc.encode(lat, lon, length)

    def decode(self, code: str) -> Rectangle:
        area = olc.decode(code)
        return Rectangle(
            min_lat=area.latitudeLo,
            max_lat=area.latitudeHi,
            min_lon=area.longitudeLo,
            max_lon=area.longitudeHi,
        )


DEFAULT_BACKEND: LocationCodeBackend = OpenLocationCodeBackend()


def encode_pluscode(
    lon: float, lat: float, code_length: int, backend: LocationCodeBackend | None = None
) -> str:
    """Convert longitude/latitude to the plus code of a given length."""
    return (backend or DEFAULT_BACKEND).encode(normalize_lat(lat), normalize_lon(lon), code_length)


def pack_pluscode(code: str) -> int:
    """Read a plus code as a big-endian base-21 number, skipping the separator."""
    result = 0
    for ch in code:
        if ch == SEPARATOR:
            continue
        pos = _ALPHABET0_LOOKUP.get(ch)
        if pos is None:
            raise InvalidCharacterError(ch)
        result = result * ALPHABET0_SIZE + pos
    return result


def unpack_pluscode(cell_hash: int) -> str:
    """Turn a base-21 hash back into a plus code with its separator."""
    if cell_hash == 0:
        raise MalformedHashError("empty hash")
    if cell_hash < 0 or cell_hash > MAX_HASH:
        raise MalformedHashError(f"plus code hash {cell_hash} is outside [1, {MAX_HASH}]")

    digits: list[str] = []
    rest = cell_hash
    while rest > 0:
        rest, val = divmod(rest, ALPHABET0_SIZE)
        digits.append(ALPHABET0[val])
    digits.reverse()

    if len(digits) < SEPARATOR_POSITION:
        raise MalformedHashError(
            f"plus code hash {cell_hash} decodes to {len(digits)} digits, "
            f"expected at least {SEPARATOR_POSITION}"
        )
    code = "".join(digits)
    return code[:SEPARATOR_POSITION] + SEPARATOR + code[SEPARATOR_POSITION:]


def encode(
    longitude: float, latitude: float, code_length: int, backend: LocationCodeBackend | None = None
) -> int:
    """Convert longitude/latitude to a plus code hash of a given precision."""
    validate_precision(code_length)
    lon = normalize_lon(longitude)
    lat = normalize_lat(latitude)
    try:
        code = encode_pluscode(lon, lat, code_length, backend)
    except ValueError as exc:
        raise InvalidPrecisionError(f"plus code length {code_length} rejected: {exc}") from exc
    return pack_pluscode(code)


def decode_to_key(cell_hash: int) -> str:
    """Decode a hash back into its plus code string."""
    return unpack_pluscode(cell_hash)


def decode_to_bbox(cell_hash: int, backend: LocationCodeBackend | None = None) -> Rectangle:
    """Compute the bounding box of the plus code area a hash addresses."""
    code = unpack_pluscode(cell_hash)
    try:
        return (backend or DEFAULT_BACKEND).decode(code)
    except ValueError as exc:
        raise MalformedHashError(f"plus code {code} cannot be decoded") from exc


def validate_precision(precision: int) -> None:
    """Reject code lengths outside [4, 14] and odd lengths below 8."""
    if (
        precision < MIN_LENGTH
        or precision > MAX_LENGTH
        or (precision < NORMAL_LENGTH and precision % 2 == 1)
    ):
        raise InvalidPrecisionError(
            f"Invalid pluscode precision of {precision}. Must be between {MIN_LENGTH} and "
            f"{MAX_LENGTH}, and must be even if less than {NORMAL_LENGTH}."
        )
