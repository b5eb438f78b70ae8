"""Dropping of leading silence from a mono audio stream."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from typing import Protocol

SILENCE_WINDOW = 55  # 5 ms at 11025 Hz


class AudioConsumer(Protocol):
    def consume(self, samples: Sequence[int]) -> None: ...


class MovingAverage:
    """Integer average of the last ``size`` values added."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("moving average window must be positive")
        self._values: deque[int] = deque(maxlen=size)
        self._sum = 0

    def add_value(self, value: int) -> None:
        if len(self._values) == self._values.maxlen:
            self._sum -= self._values[0]
        self._values.append(value)
        self._sum += value

    def average(self) -> int:
        if not self._values:
            return 0
        return self._sum // len(self._values)


class SilenceRemover:
    """Skips samples until the moving average of their magnitude exceeds a threshold."""

    def __init__(self, consumer: AudioConsumer, threshold: int = 0) -> None:
        self.consumer = consumer
        self.threshold = threshold
        self._start = True
        self._average = MovingAverage(SILENCE_WINDOW)

    def reset(self, sample_rate: int, num_channels: int) -> None:
        """Start over with a new stream; only mono audio is accepted."""
        if num_channels != 1:
            raise ValueError("expecting mono audio signal")
        self._start = True

    def consume(self, samples: Sequence[int]) -> None:
        if self._start:
            for index, sample in enumerate(samples):
                self._average.add_value(abs(int(sample)))
                if self._average.average() > self.threshold:
                    self._start = False
                    samples = samples[index:]
                    break
            else:
                return
        if len(samples):
            self.consumer.consume(samples)

    def flush(self) -> None:
        """Nothing is buffered here; pass the flush on to a consumer that has one."""
        consumer_flush = getattr(self.consumer, "flush", None)
        if callable(consumer_flush):
            consumer_flush()