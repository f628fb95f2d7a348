"""Morton (Z-order) bit interleaving for 32-bit tile indices."""

from __future__ import annotations

_MAGIC = (
    0x5555555555555555,
    0x3333333333333333,
    0x0F0F0F0F0F0F0F0F,
    0x00FF00FF00FF00FF,
    0x0000FFFF0000FFFF,
    0x00000000FFFFFFFF,
)
_SHIFT = (1, 2, 4, 8, 16)


def _spread(v: int) -> int:
    v &= 0xFFFFFFFF
    v = (v | (v << 16)) & _MAGIC[4]
    v = (v | (v << 8)) & _MAGIC[3]
    v = (v | (v << 4)) & _MAGIC[2]
    v = (v | (v << 2)) & _MAGIC[1]
    v = (v | (v << 1)) & _MAGIC[0]
    return v


def interleave(even: int, odd: int) -> int:
    """Interleave two 32-bit values: `even` on even bit positions, `odd` on odd ones."""
    return _spread(even) | (_spread(odd) << 1)


def deinterleave(b: int) -> int:
    """Extract the value stored on the even bit positions of `b`."""
    b &= _MAGIC[0]
    for shift, mask in zip(_SHIFT, _MAGIC[1:]):
        b = (b ^ (b >> shift)) & mask
    return b
