"""Similarity hash over a sequence of 32-bit sub-fingerprints."""

from __future__ import annotations

from collections.abc import Iterable

_BITS = 32


def simhash(data: Iterable[int]) -> int:
    """Return a 32-bit hash whose bits are the majority vote of the inputs.

    A bit is set in the result only when it is set in strictly more than
    half of the values; an empty input gives 0.
    """
    votes = [0] * _BITS
    for value in data:
        value &= 0xFFFFFFFF
        for bit in range(_BITS):
            votes[bit] += 1 if value & (1 << bit) else -1
    return sum(1 << bit for bit, vote in enumerate(votes) if vote > 0)