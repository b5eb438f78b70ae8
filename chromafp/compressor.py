"""Compact binary encoding of fingerprints."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

_NORMAL_BITS = 3
_EXCEPTION_BITS = 5
MAX_NORMAL_VALUE = (1 << _NORMAL_BITS) - 1
_UINT32_MASK = 0xFFFFFFFF


def _pack(values: Sequence[int], bits: int) -> bytes:
    """Pack values of ``bits`` bits each into a little-endian bit stream."""
    mask = (1 << bits) - 1
    out = bytearray()
    for start in range(0, len(values), 8):
        group = 0
        for position, value in enumerate(values[start:start + 8]):
            group |= (value & mask) << (bits * position)
        out += group.to_bytes(bits, "little")
    size = (len(values) * bits + 7) // 8
    return bytes(out[:size])


def _unpack(data: bytes, bits: int) -> list[int]:
    """Unpack as many ``bits``-bit values as fit in ``data``."""
    mask = (1 << bits) - 1
    count = len(data) * 8 // bits
    values: list[int] = []
    for start in range(0, len(data), bits):
        group = int.from_bytes(data[start:start + bits], "little")
        values.extend((group >> (bits * position)) & mask for position in range(8))
    return values[:count]


def pack_int3_array(values: Sequence[int]) -> bytes:
    """Pack 3-bit values, eight to every three bytes."""
    return _pack(list(values), _NORMAL_BITS)


def pack_int5_array(values: Sequence[int]) -> bytes:
    """Pack 5-bit values, eight to every five bytes."""
    return _pack(list(values), _EXCEPTION_BITS)


def unpack_int3_array(data: bytes) -> list[int]:
    """Return every whole 3-bit value held in ``data``."""
    return _unpack(bytes(data), _NORMAL_BITS)


def unpack_int5_array(data: bytes) -> list[int]:
    """Return every whole 5-bit value held in ``data``."""
    return _unpack(bytes(data), _EXCEPTION_BITS)


def _bit_gaps(x: int, normal: list[int], exceptional: list[int]) -> None:
    bit, last_bit = 1, 0
    while x:
        if x & 1:
            gap = bit - last_bit
            if gap >= MAX_NORMAL_VALUE:
                normal.append(MAX_NORMAL_VALUE)
                exceptional.append(gap - MAX_NORMAL_VALUE)
            else:
                normal.append(gap)
            last_bit = bit
        x >>= 1
        bit += 1
    normal.append(0)


def compress_fingerprint(fingerprint: Iterable[int], algorithm: int = 0) -> bytes:
    """Encode a fingerprint with a four-byte header followed by packed bit gaps.

    The header holds the algorithm number and the value count as a 24-bit
    big-endian integer.
    """
    normal: list[int] = []
    exceptional: list[int] = []
    previous = 0
    size = 0
    for value in fingerprint:
        value &= _UINT32_MASK
        _bit_gaps(value ^ previous, normal, exceptional)
        previous = value
        size += 1
    header = bytes(
        [algorithm & 255, (size >> 16) & 255, (size >> 8) & 255, size & 255]
    )
    return header + pack_int3_array(normal) + pack_int5_array(exceptional)