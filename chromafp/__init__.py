"""Acoustic fingerprint building blocks: FFT framing, Bark bands, classifiers, compression, simhash and matching."""

__version__ = "1.4.4"