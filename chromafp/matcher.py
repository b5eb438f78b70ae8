"""Alignment of two fingerprints and detection of their matching segments."""

from __future__ import annotations

import random
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field

from chromafp.configuration import FingerprinterConfiguration
from chromafp.smoothing import gaussian_filter, gradient

DEFAULT_MATCH_THRESHOLD = 10.0

_ALIGN_BITS = 12
_OFFSET_LIMIT = (1 << (32 - _ALIGN_BITS - 1)) - 1
_UINT32_MASK = 0xFFFFFFFF


def _align_hash(value: int) -> int:
    return (value & _UINT32_MASK) >> (32 - _ALIGN_BITS)


@dataclass
class Segment:
    """A stretch of ``duration`` items starting at ``pos1`` and ``pos2``.

    ``score`` is the mean number of differing bits per item.
    """

    pos1: int
    pos2: int
    duration: int
    score: float
    left_score: float | None = field(default=None)
    right_score: float | None = field(default=None)

    def __post_init__(self) -> None:
        if self.left_score is None:
            self.left_score = self.score
        if self.right_score is None:
            self.right_score = self.score

    def public_score(self) -> int:
        return int(self.score * 100 + 0.5)

    def merged(self, other: Segment) -> Segment:
        """Join with a segment that starts right where this one ends."""
        if self.pos1 + self.duration != other.pos1 or self.pos2 + self.duration != other.pos2:
            raise ValueError("segments are not adjacent")
        new_duration = self.duration + other.duration
        new_score = (
            self.score * self.duration + other.score * other.duration
        ) / new_duration
        return Segment(
            self.pos1, self.pos2, new_duration, new_score, self.score, other.score
        )


class FingerprintMatcher:
    """Finds the best alignment of two fingerprints and the segments that match."""

    def __init__(
        self,
        config: FingerprinterConfiguration,
        match_threshold: float = DEFAULT_MATCH_THRESHOLD,
    ) -> None:
        self.config = config
        self.match_threshold = match_threshold
        self._segments: list[Segment] = []
        self._rng = random.Random()

    def hash_time(self, i: int) -> float:
        return self.config.item_duration_in_seconds * i

    def hash_duration(self, i: int) -> float:
        return self.hash_time(i) + self.config.delay_in_seconds

    @property
    def segments(self) -> list[Segment]:
        return list(self._segments)

    def match(self, fp1: Sequence[int], fp2: Sequence[int]) -> list[Segment]:
        """Align the fingerprints and return the segments scoring below the threshold."""
        fp1 = [v & _UINT32_MASK for v in fp1]
        fp2 = [v & _UINT32_MASK for v in fp2]
        if len(fp1) + 1 >= _OFFSET_LIMIT:
            raise ValueError("fingerprint 1 too long")
        if len(fp2) + 1 >= _OFFSET_LIMIT:
            raise ValueError("fingerprint 2 too long")

        self._segments = []
        size1, size2 = len(fp1), len(fp2)

        positions2: dict[int, list[int]] = defaultdict(list)
        for i2, value in enumerate(fp2):
            positions2[_align_hash(value)].append(i2)

        histogram = [0] * (size1 + size2)
        for i1, value in enumerate(fp1):
            for i2 in positions2.get(_align_hash(value), ()):
                histogram[i1 + size2 - i2] += 1

        last = len(histogram) - 1
        peaks = [
            (count, i)
            for i, count in enumerate(histogram)
            if count > 1
            and (i == 0 or histogram[i - 1] <= count)
            and (i == last or histogram[i + 1] <= count)
        ]
        if not peaks:
            return self.segments

        _, best = max(peaks)
        offset_diff = best - size2
        offset1 = max(offset_diff, 0)
        offset2 = max(-offset_diff, 0)
        size = min(size1 - offset1, size2 - offset2)

        bit_counts = [
            (a ^ b).bit_count() + self._rng.random() * 0.001
            for a, b in zip(fp1[offset1:offset1 + size], fp2[offset2:offset2 + size])
        ]
        smoothed = gaussian_filter(bit_counts, 8.0, 3)
        slopes = [abs(g) for g in gradient(smoothed)]

        boundaries: list[int] = []
        for i in range(1, size - 1):
            g = slopes[i]
            if g > 0.15 and g >= slopes[i - 1] and g >= slopes[i + 1]:
                if not boundaries or boundaries[-1] + 1 < i:
                    boundaries.append(i)
        boundaries.append(size)

        begin = 0
        for end in boundaries:
            duration = end - begin
            score = sum(bit_counts[begin:end]) / duration
            if score < self.match_threshold:
                segment = Segment(offset1 + begin, offset2 + begin, duration, score)
                previous = self._segments[-1] if self._segments else None
                if (
                    previous is not None
                    and abs(previous.score - score) < 0.7
                    and previous.pos1 + previous.duration == segment.pos1
                ):
                    self._segments[-1] = previous.merged(segment)
                else:
                    self._segments.append(segment)
            begin = end
        return self.segments