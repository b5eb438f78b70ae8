# chromafp

Building blocks for acoustic fingerprints of audio, in Python on top of numpy.

## What is inside

- `chromafp.fft`: `FFT(frame_size, overlap, consumer)` takes 16-bit samples through `consume()`. It cuts them into overlapping frames and applies a Hamming window (`hamming_window`) to each frame. It then calls `consumer.consume()` with the frame's power spectrum, which has `frame_size // 2 + 1` squared magnitudes. `frame_size`, `increment` and `overlap` are properties. `reset()` drops buffered samples.
- `chromafp.silence_remover`: `SilenceRemover(consumer, threshold)` drops samples until the `MovingAverage` of their absolute values, over 55 samples, exceeds the threshold. After that it passes the samples on to the consumer. `reset()` accepts mono audio only and raises `ValueError` otherwise.
- `chromafp.spectrum`: `Spectrum` splits a power spectrum into bands of equal width on the Bark scale. It sends the mean value of each band to a consumer. The module also has `freq_to_bark`, `freq_to_index` and `index_to_freq`.
- `chromafp.classifier`:
  - `RollingIntegralImage` is an integral image that keeps only the latest rows.
  - `filter0` to `filter5` are the Haar-like filters, with the comparators `subtract` and `subtract_log`.
  - `Filter`, `Quantizer` and `Classifier` build on them.
  - `gray_code` gives the Gray code of a value.
- `chromafp.configuration`:
  - `Algorithm` lists the algorithms `TEST1` to `TEST5`. `DEFAULT` is `TEST2`.
  - `FingerprinterConfiguration` holds the classifiers, the filter coefficients and the framing settings. It derives `item_duration`, `delay` and related values from them.
  - `create_configuration(algorithm)` returns a fresh configuration. It raises `ValueError` for an unknown algorithm.
- `chromafp.calculator`: `FingerprintCalculator(classifiers)` turns a stream of feature rows into 32-bit subfingerprints. Call `consume()` for each row and read the result from the `fingerprint` property.
- `chromafp.compressor`:
  - `compress_fingerprint(fingerprint, algorithm=0)` writes the compact binary format. It is a 4-byte header, then 3-bit packed bit gaps, then 5-bit exceptions.
  - `pack_int3_array`, `pack_int5_array`, `unpack_int3_array` and `unpack_int5_array` do the bit packing.
- `chromafp.decompressor`: `decompress_fingerprint(data)` returns `(fingerprint, algorithm)`. It raises `InvalidFingerprintError` (a `ValueError`) when the data is malformed or truncated.
- `chromafp.simhash`: `simhash` reduces a fingerprint to one 32-bit hash. Each bit of the hash is the majority vote of that bit across the input values.
- `chromafp.smoothing`: `box_filter`, `gaussian_filter`, `gradient` and `ReflectIterator`. The filters reflect the input at its edges.
- `chromafp.matcher`:
  - `FingerprintMatcher(config, match_threshold=10.0)` aligns two fingerprints with `match()` and returns the matching `Segment`s.
  - `match()` also keeps the segments in the `segments` property.
  - `hash_time()` and `hash_duration()` convert item positions to seconds.

## Example

```python
from chromafp.configuration import Algorithm, create_configuration
from chromafp.compressor import compress_fingerprint
from chromafp.decompressor import decompress_fingerprint
from chromafp.simhash import simhash
from chromafp.matcher import FingerprintMatcher

fingerprint = [0x12345678, 0x12345679, 0x1234567B]

data = compress_fingerprint(fingerprint, Algorithm.TEST2)
values, algorithm = decompress_fingerprint(data)
assert values == fingerprint
assert algorithm == Algorithm.TEST2

print(hex(simhash(fingerprint)))

matcher = FingerprintMatcher(create_configuration(Algorithm.TEST2))
for segment in matcher.match(fingerprint, fingerprint):
    print(segment.pos1, segment.pos2, segment.duration, segment.public_score())
```

## What it does not do

The package has no single object that takes audio in and returns a fingerprint.

- **No audio decoding or resampling.** Samples must already be 16-bit mono integers at the rate the configuration expects, which is 11025 Hz.
- **No chroma stage.** There is no chroma feature extraction, chroma filtering or chroma normalization between `FFT` and `FingerprintCalculator`. You supply the feature rows for the calculator yourself.
- **No command-line tool.** The package is a library only.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```