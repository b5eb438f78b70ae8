"""Band energies of a power spectrum on the Bark scale."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Protocol

import numpy as np


class FeatureVectorConsumer(Protocol):
    def consume(self, features: list[float]) -> None: ...


def freq_to_bark(freq: float) -> float:
    """Convert a frequency in Hz to the Bark scale."""
    z = (26.81 * freq) / (1960.0 + freq) - 0.53
    if z < 2.0:
        z += 0.15 * (2.0 - z)
    elif z > 20.1:
        z += 0.22 * (z - 20.1)
    return z


def freq_to_index(freq: float, frame_size: int, sample_rate: int) -> int:
    """Index of the FFT bin nearest to ``freq``, rounding halves away from zero."""
    position = frame_size * freq / sample_rate
    return int(math.copysign(math.floor(abs(position) + 0.5), position))


def index_to_freq(index: int, frame_size: int, sample_rate: int) -> float:
    """Centre frequency in Hz of FFT bin ``index``."""
    return index * sample_rate / frame_size


class Spectrum:
    """Averages spectrum bins over bands of equal width on the Bark scale."""

    def __init__(
        self,
        num_bands: int,
        min_freq: int,
        max_freq: int,
        frame_size: int,
        sample_rate: int,
        consumer: FeatureVectorConsumer,
    ) -> None:
        if num_bands <= 0:
            raise ValueError("number of bands must be positive")
        self.consumer = consumer
        self._bands = [0] * (num_bands + 1)
        self._features = [0.0] * num_bands
        self._prepare_bands(num_bands, min_freq, max_freq, frame_size, sample_rate)

    def _prepare_bands(
        self, num_bands: int, min_freq: int, max_freq: int, frame_size: int, sample_rate: int
    ) -> None:
        min_bark = freq_to_bark(min_freq)
        max_bark = freq_to_bark(max_freq)
        band_size = (max_bark - min_bark) / num_bands

        min_index = freq_to_index(min_freq, frame_size, sample_rate)
        self._bands[0] = min_index
        prev_bark = min_bark
        band = 0
        for index in range(min_index, frame_size // 2):
            bark = freq_to_bark(index_to_freq(index, frame_size, sample_rate))
            if bark - prev_bark > band_size:
                band += 1
                prev_bark = bark
                self._bands[band] = index
                if band >= num_bands:
                    break

    @property
    def bands(self) -> list[int]:
        """Bin boundaries: band ``i`` covers bins ``[bands[i], bands[i + 1])``."""
        return list(self._bands)

    def reset(self) -> None:
        """Clear the feature vector of the last frame."""
        self._features = [0.0] * len(self._features)

    def consume(self, frame: Sequence[float]) -> None:
        values = np.asarray(frame, dtype=np.float64)
        for band, (first, last) in enumerate(zip(self._bands, self._bands[1:])):
            total = float(np.sum(values[first:last])) if last > first else 0.0
            count = last - first
            self._features[band] = total / count if count else math.nan
        self.consumer.consume(list(self._features))