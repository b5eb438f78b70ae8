"""Turning a stream of feature vectors into sub-fingerprints."""

from __future__ import annotations

from collections.abc import Sequence

from chromafp.classifier import Classifier, RollingIntegralImage, gray_code

_IMAGE_ROWS = 256


class FingerprintCalculator:
    """Classifies a rolling window of feature rows into 32-bit values."""

    def __init__(self, classifiers: Sequence[Classifier]) -> None:
        self._classifiers = tuple(classifiers)
        self._max_filter_width = max(
            (c.filter.width for c in self._classifiers), default=0
        )
        if not 0 < self._max_filter_width < _IMAGE_ROWS:
            raise ValueError(
                f"largest filter width must be between 1 and {_IMAGE_ROWS - 1}"
            )
        self._image = RollingIntegralImage(_IMAGE_ROWS)
        self._fingerprint: list[int] = []

    def _subfingerprint(self, offset: int) -> int:
        bits = 0
        for classifier in self._classifiers:
            bits = ((bits << 2) | gray_code(classifier.classify(self._image, offset))) & 0xFFFFFFFF
        return bits

    def consume(self, features: Sequence[float]) -> None:
        self._image.add_row(features)
        if self._image.num_rows >= self._max_filter_width:
            self._fingerprint.append(
                self._subfingerprint(self._image.num_rows - self._max_filter_width)
            )

    @property
    def fingerprint(self) -> list[int]:
        """Sub-fingerprints produced from the data seen so far."""
        return list(self._fingerprint)

    def clear_fingerprint(self) -> None:
        """Drop the produced values but keep processing state."""
        self._fingerprint.clear()

    def reset(self) -> None:
        self._image.reset()
        self._fingerprint.clear()