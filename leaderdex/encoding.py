"""Variable-byte integer encoding.

Each number is written as big-endian groups of seven bits; the high bit is
set on the last byte of a number to mark its end.
"""

from __future__ import annotations

from typing import Iterable

CONT_MASK = 0b1000_0000


def vb_encode(value: int) -> bytes:
    """Encode a non-negative integer."""
    if value < 0:
        raise ValueError("vb_encode needs a non-negative integer")
    if value == 0:
        return bytes([CONT_MASK])
    groups = bytearray()
    while value:
        groups.append(value % 128)
        value //= 128
    groups.reverse()
    groups[-1] |= CONT_MASK
    return bytes(groups)


def vb_decode(data: Iterable[int]) -> int:
    """Decode one number, consuming bytes from ``data`` up to its last byte.

    Passing an iterator lets successive calls read successive numbers. If
    the input ends early, the value accumulated so far is returned.
    """
    result = 0
    for byte in iter(data):
        result = (result << 7) | (byte & 0x7F)
        if byte & CONT_MASK:
            break
    return result