import math

import numpy as np
import pytest

from chromafp.fft import FFT, INT16_MAX, hamming_window


class Collector:
    def __init__(self):
        self.frames = []

    def consume(self, frame):
        self.frames.append(np.array(frame, copy=True))


NFRAMES = 3
FRAME_SIZE = 32
OVERLAP = 8
INPUT_SIZE = FRAME_SIZE + (NFRAMES - 1) * (FRAME_SIZE - OVERLAP)

SINE_SPECTRUM = [
    2.87005e-05, 0.00011901, 0.00029869, 0.000667172, 0.00166813,
    0.00605612, 0.228737, 0.494486, 0.210444, 0.00385322, 0.00194379,
    0.00124616, 0.000903851, 0.000715237, 0.000605707, 0.000551375,
    0.000534304,
]

DC_SPECTRUM = [
    0.494691, 0.219547, 0.00488079, 0.00178991, 0.000939219, 0.000576082,
    0.000385808, 0.000272904, 0.000199905, 0.000149572, 0.000112947,
    8.5041e-05, 6.28312e-05, 4.4391e-05, 2.83757e-05, 1.38507e-05, 0,
]


def _run(samples, chunk_size=100):
    collector = Collector()
    fft = FFT(FRAME_SIZE, OVERLAP, collector)
    assert fft.frame_size == FRAME_SIZE
    assert fft.overlap == OVERLAP
    for start in range(0, len(samples), chunk_size):
        fft.consume(samples[start:start + chunk_size])
    return collector.frames


def _sine_input():
    sample_rate = 1000
    freq = 7 * (sample_rate // 2) // (FRAME_SIZE // 2)
    return [
        int(INT16_MAX * math.sin(i * freq * 2.0 * math.pi / sample_rate))
        for i in range(INPUT_SIZE)
    ]


def _check(frames, expected):
    assert len(frames) == NFRAMES
    for frame in frames:
        assert len(frame) == len(expected)
        magnitudes = np.sqrt(frame) / len(frame)
        for value, want in zip(magnitudes, expected):
            assert value == pytest.approx(want, abs=0.001)


def test_sine():
    _check(_run(_sine_input()), SINE_SPECTRUM)


def test_dc():
    _check(_run([int(INT16_MAX * 0.5)] * INPUT_SIZE), DC_SPECTRUM)


def test_chunking_does_not_change_output():
    samples = _sine_input()
    whole = _run(samples, chunk_size=len(samples))
    pieces = _run(samples, chunk_size=7)
    assert len(whole) == len(pieces)
    for a, b in zip(whole, pieces):
        np.testing.assert_allclose(a, b)


def test_increment():
    fft = FFT(FRAME_SIZE, OVERLAP, Collector())
    assert fft.increment == FRAME_SIZE - OVERLAP


def test_reset_discards_partial_frame():
    collector = Collector()
    fft = FFT(FRAME_SIZE, OVERLAP, collector)
    fft.consume([1000] * (FRAME_SIZE - 1))
    fft.reset()
    fft.consume([1000] * (FRAME_SIZE - 1))
    assert collector.frames == []


def test_invalid_overlap():
    with pytest.raises(ValueError):
        FFT(FRAME_SIZE, FRAME_SIZE, Collector())


def test_hamming_window_symmetric_and_scaled():
    window = hamming_window(16, 2.0)
    np.testing.assert_allclose(window, window[::-1])
    assert window[0] == pytest.approx(2.0 * 0.08)
    assert window.max() <= 2.0


def test_hamming_window_rejects_empty():
    with pytest.raises(ValueError):
        hamming_window(0, 1.0)