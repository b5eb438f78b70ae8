"""Edge-reflecting box and Gaussian smoothing, and a discrete gradient."""

from __future__ import annotations

import math
from collections.abc import Sequence


class ReflectIterator:
    """Walks positions of a sequence of ``size`` items, mirroring at both ends.

    Stepping past an end repeats the edge item and then walks back, so the
    positions visited from -3 to 3 over three items are 2, 1, 0, 0, 1, 2, 2.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self.size = size
        self.pos = 0
        self.forward = True

    def move_forward(self) -> None:
        if self.forward:
            if self.pos + 1 == self.size:
                self.forward = False
            else:
                self.pos += 1
        elif self.pos == 0:
            self.forward = True
        else:
            self.pos -= 1

    def move_back(self) -> None:
        if self.forward:
            if self.pos == 0:
                self.forward = False
            else:
                self.pos -= 1
        elif self.pos + 1 == self.size:
            self.forward = True
        else:
            self.pos += 1

    def safe_forward_distance(self) -> int:
        """Steps that can be taken forward before the next reflection."""
        if self.forward:
            return self.size - self.pos - 1
        return 0


def _reflect(index: int, size: int) -> int:
    period = index % (2 * size)
    return period if period < size else 2 * size - 1 - period


def box_filter(values: Sequence[float], width: int) -> list[float]:
    """Moving average over ``width`` items, reflecting the input at its edges.

    Item ``i`` of the result averages the inputs from ``i - width // 2`` up to
    ``i - width // 2 + width - 1``.
    """
    if width <= 0:
        raise ValueError("filter width must be positive")
    data = [float(v) for v in values]
    size = len(data)
    if not size:
        return []
    left = width // 2
    window = [data[_reflect(j, size)] for j in range(-left, width - left)]
    total = sum(window)
    result = []
    for i in range(size):
        result.append(total / width)
        leaving = data[_reflect(i - left, size)]
        entering = data[_reflect(i - left + width, size)]
        total += entering - leaving
    return result


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def gaussian_filter(values: Sequence[float], sigma: float, passes: int) -> list[float]:
    """Approximate a Gaussian blur of deviation ``sigma`` by ``passes`` box filters."""
    if sigma <= 0:
        raise ValueError("sigma must be positive")
    if passes <= 0:
        raise ValueError("number of passes must be positive")
    w = math.floor(math.sqrt(12 * sigma * sigma / passes + 1))
    wl = w - 1 if w % 2 == 0 else w
    wu = wl + 2
    m = _round_half_away(
        (12 * sigma * sigma - passes * wl * wl - 4 * passes * wl - 3 * passes)
        / (-4 * wl - 4)
    )
    data = [float(v) for v in values]
    done = 0
    while done < m:
        data = box_filter(data, wl)
        done += 1
    while done < passes:
        data = box_filter(data, wu)
        done += 1
    return data


def gradient(values: Sequence[float]) -> list[float]:
    """Central differences inside, one-sided differences at the two ends."""
    data = [float(v) for v in values]
    if not data:
        return []
    if len(data) == 1:
        return [0.0]
    result = [data[1] - data[0]]
    result.extend((data[i + 1] - data[i - 1]) / 2 for i in range(1, len(data) - 1))
    result.append(data[-1] - data[-2])
    return result