"""Windowed short-time power spectrum of 16-bit audio."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import numpy as np

INT16_MAX = 32767


class FFTFrameConsumer(Protocol):
    def consume(self, frame: np.ndarray) -> None: ...


def hamming_window(size: int, scale: float) -> np.ndarray:
    """Return a Hamming window of ``size`` points multiplied by ``scale``."""
    if size <= 0:
        raise ValueError("window size must be positive")
    if size == 1:
        return np.array([scale], dtype=np.float64)
    positions = np.arange(size, dtype=np.float64)
    return scale * (0.54 - 0.46 * np.cos(2.0 * np.pi * positions / (size - 1)))


class FFT:
    """Cuts audio into overlapping frames and emits each frame's power spectrum.

    Every spectrum holds ``frame_size // 2 + 1`` squared magnitudes.
    """

    def __init__(self, frame_size: int, overlap: int, consumer: FFTFrameConsumer) -> None:
        if frame_size <= 0:
            raise ValueError("frame size must be positive")
        if not 0 <= overlap < frame_size:
            raise ValueError("overlap must be non-negative and smaller than the frame size")
        self._frame_size = frame_size
        self._increment = frame_size - overlap
        self._window = hamming_window(frame_size, 1.0 / INT16_MAX)
        self._buffer = np.empty(0, dtype=np.int16)
        self.consumer = consumer

    @property
    def frame_size(self) -> int:
        return self._frame_size

    @property
    def increment(self) -> int:
        return self._increment

    @property
    def overlap(self) -> int:
        return self._frame_size - self._increment

    def reset(self) -> None:
        """Discard any buffered samples."""
        self._buffer = np.empty(0, dtype=np.int16)

    def consume(self, samples: Sequence[int]) -> None:
        data = np.asarray(samples, dtype=np.int16)
        self._buffer = np.concatenate((self._buffer, data))
        start = 0
        while len(self._buffer) - start >= self._frame_size:
            chunk = self._buffer[start:start + self._frame_size]
            self.consumer.consume(self._compute(chunk))
            start += self._increment
        self._buffer = self._buffer[start:].copy()

    def _compute(self, chunk: np.ndarray) -> np.ndarray:
        spectrum = np.fft.rfft(chunk.astype(np.float64) * self._window)
        return spectrum.real ** 2 + spectrum.imag ** 2