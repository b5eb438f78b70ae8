"""Integral image, Haar-like filters and the classifiers built on them."""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

Comparator = Callable[[float, float], float]


class RollingIntegralImage:
    """Integral image that keeps only the most recent rows.

    Rows run along time and columns along features.  ``area`` returns the sum
    of the rectangle spanning rows ``[r1, r2)`` and columns ``[c1, c2)``.
    """

    def __init__(self, max_rows: int) -> None:
        if max_rows <= 0:
            raise ValueError("max_rows must be positive")
        self._capacity = max_rows + 1
        self._rows: deque[np.ndarray] = deque(maxlen=self._capacity)
        self._num_rows = 0
        self._num_columns = 0

    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def num_columns(self) -> int:
        return self._num_columns

    def add_row(self, row: Sequence[float]) -> None:
        values = np.asarray(row, dtype=np.float64)
        if values.ndim != 1 or values.size == 0:
            raise ValueError("a row must be a non-empty flat sequence")
        if self._num_rows == 0:
            self._num_columns = values.size
        elif values.size != self._num_columns:
            raise ValueError(
                f"row has {values.size} columns, expected {self._num_columns}"
            )
        integral = np.cumsum(values)
        if self._rows:
            integral += self._rows[-1]
        self._rows.append(integral)
        self._num_rows += 1

    def reset(self) -> None:
        self._rows.clear()
        self._num_rows = 0
        self._num_columns = 0

    def _row(self, index: int) -> np.ndarray:
        return self._rows[index - (self._num_rows - len(self._rows))]

    def area(self, r1: int, c1: int, r2: int, c2: int) -> float:
        if not (0 <= r1 <= self._num_rows and 0 <= r2 <= self._num_rows):
            raise IndexError("row range outside the image")
        if not (0 <= c1 <= self._num_columns and 0 <= c2 <= self._num_columns):
            raise IndexError("column range outside the image")
        if self._num_rows > self._capacity:
            oldest = self._num_rows - self._capacity
            if r1 <= oldest or r2 <= oldest:
                raise IndexError("rows are no longer kept in the image")
        if r1 == r2 or c1 == c2:
            return 0.0
        if r2 < r1 or c2 < c1:
            raise IndexError("empty or reversed range")
        last = self._row(r2 - 1)
        if r1 == 0:
            if c1 == 0:
                return float(last[c2 - 1])
            return float(last[c2 - 1] - last[c1 - 1])
        first = self._row(r1 - 1)
        if c1 == 0:
            return float(last[c2 - 1] - first[c2 - 1])
        return float(last[c2 - 1] - first[c2 - 1] - last[c1 - 1] + first[c1 - 1])


def subtract(a: float, b: float) -> float:
    return a - b


def subtract_log(a: float, b: float) -> float:
    """Log of the ratio of ``1 + a`` to ``1 + b``."""
    return math.log((1.0 + a) / (1.0 + b))


def _check_size(w: int, h: int) -> None:
    if w < 1 or h < 1:
        raise ValueError("filter width and height must be at least 1")


def filter0(image: RollingIntegralImage, x: int, y: int, w: int, h: int, cmp: Comparator) -> float:
    """Whole rectangle against nothing."""
    _check_size(w, h)
    return cmp(image.area(x, y, x + w, y + h), 0.0)


def filter1(image: RollingIntegralImage, x: int, y: int, w: int, h: int, cmp: Comparator) -> float:
    """Upper half of the columns against the lower half."""
    _check_size(w, h)
    h_2 = h // 2
    a = image.area(x, y + h_2, x + w, y + h)
    b = image.area(x, y, x + w, y + h_2)
    return cmp(a, b)


def filter2(image: RollingIntegralImage, x: int, y: int, w: int, h: int, cmp: Comparator) -> float:
    """Later half of the rows against the earlier half."""
    _check_size(w, h)
    w_2 = w // 2
    a = image.area(x + w_2, y, x + w, y + h)
    b = image.area(x, y, x + w_2, y + h)
    return cmp(a, b)


def filter3(image: RollingIntegralImage, x: int, y: int, w: int, h: int, cmp: Comparator) -> float:
    """Checkerboard of four quadrants."""
    _check_size(w, h)
    w_2 = w // 2
    h_2 = h // 2
    a = image.area(x, y + h_2, x + w_2, y + h) + image.area(x + w_2, y, x + w, y + h_2)
    b = image.area(x, y, x + w_2, y + h_2) + image.area(x + w_2, y + h_2, x + w, y + h)
    return cmp(a, b)


def filter4(image: RollingIntegralImage, x: int, y: int, w: int, h: int, cmp: Comparator) -> float:
    """Middle third of the columns against the outer thirds."""
    _check_size(w, h)
    h_3 = h // 3
    a = image.area(x, y + h_3, x + w, y + 2 * h_3)
    b = image.area(x, y, x + w, y + h_3) + image.area(x, y + 2 * h_3, x + w, y + h)
    return cmp(a, b)


def filter5(image: RollingIntegralImage, x: int, y: int, w: int, h: int, cmp: Comparator) -> float:
    """Middle third of the rows against the outer thirds."""
    _check_size(w, h)
    w_3 = w // 3
    a = image.area(x + w_3, y, x + 2 * w_3, y + h)
    b = image.area(x, y, x + w_3, y + h) + image.area(x + 2 * w_3, y, x + w, y + h)
    return cmp(a, b)


_FILTERS = (filter0, filter1, filter2, filter3, filter4, filter5)


def gray_code(value: int) -> int:
    """Gray code of a quantized value (0, 1, 2, 3 map to 0, 1, 3, 2)."""
    if value < 0:
        raise ValueError("gray code is defined for non-negative values")
    return value ^ (value >> 1)


@dataclass(frozen=True)
class Filter:
    """A filter of the given kind over ``height`` columns from ``y`` and ``width`` rows."""

    kind: int = 0
    y: int = 0
    height: int = 0
    width: int = 0

    def apply(self, image: RollingIntegralImage, offset: int) -> float:
        if 0 <= self.kind < len(_FILTERS):
            return _FILTERS[self.kind](image, offset, self.y, self.width, self.height, subtract_log)
        return 0.0


@dataclass(frozen=True)
class Quantizer:
    """Maps a value to 0..3 using three ascending thresholds."""

    t0: float = 0.0
    t1: float = 0.0
    t2: float = 0.0

    def quantize(self, value: float) -> int:
        if value < self.t1:
            return 0 if value < self.t0 else 1
        return 2 if value < self.t2 else 3


@dataclass(frozen=True)
class Classifier:
    filter: Filter
    quantizer: Quantizer

    def classify(self, image: RollingIntegralImage, offset: int) -> int:
        return self.quantizer.quantize(self.filter.apply(image, offset))