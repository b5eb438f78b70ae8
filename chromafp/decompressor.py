"""Decoding of compressed fingerprints."""

from __future__ import annotations

from chromafp.compressor import MAX_NORMAL_VALUE, unpack_int3_array, unpack_int5_array

_UINT32_MASK = 0xFFFFFFFF


class InvalidFingerprintError(ValueError):
    """Raised when compressed fingerprint data is malformed or truncated."""


def decompress_fingerprint(data: bytes) -> tuple[list[int], int]:
    """Decode compressed data, returning the fingerprint and its algorithm number."""
    data = bytes(data)
    if len(data) < 4:
        raise InvalidFingerprintError("invalid fingerprint (shorter than 4 bytes)")

    algorithm = data[0]
    num_values = int.from_bytes(data[1:4], "big")

    bits = unpack_int3_array(data[4:])
    found_values = 0
    num_exceptional = 0
    for index, bit in enumerate(bits):
        if bit == 0:
            found_values += 1
            if found_values == num_values:
                bits = bits[: index + 1]
                break
        elif bit == MAX_NORMAL_VALUE:
            num_exceptional += 1

    if found_values != num_values:
        raise InvalidFingerprintError(
            "invalid fingerprint (too short, not enough data for normal bits)"
        )

    offset = 4 + (len(bits) * 3 + 7) // 8
    exceptional_size = (num_exceptional * 5 + 7) // 8
    if len(data) < offset + exceptional_size:
        raise InvalidFingerprintError(
            "invalid fingerprint (too short, not enough data for exceptional bits)"
        )

    if num_exceptional:
        extras = iter(unpack_int5_array(data[offset:offset + exceptional_size]))
        bits = [bit + next(extras) if bit == MAX_NORMAL_VALUE else bit for bit in bits]

    result: list[int] = []
    value = 0
    last_bit = 0
    for bit in bits:
        if len(result) == num_values:
            break
        if bit == 0:
            result.append((value ^ result[-1]) if result else value)
            value = 0
            last_bit = 0
            continue
        last_bit += bit
        value = (value | (1 << (last_bit - 1))) & _UINT32_MASK
    return result, algorithm