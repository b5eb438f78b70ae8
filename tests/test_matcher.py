import random

import pytest

from chromafp.configuration import Algorithm, create_configuration
from chromafp.matcher import DEFAULT_MATCH_THRESHOLD, FingerprintMatcher, Segment


def _random_fingerprint(length, seed):
    rng = random.Random(seed)
    return [rng.getrandbits(32) for _ in range(length)]


@pytest.fixture
def matcher():
    return FingerprintMatcher(create_configuration(Algorithm.TEST1))


def test_default_threshold(matcher):
    assert matcher.match_threshold == DEFAULT_MATCH_THRESHOLD


def test_segment_defaults_side_scores():
    segment = Segment(1, 2, 3, 0.5)
    assert segment.left_score == 0.5
    assert segment.right_score == 0.5


def test_segment_public_score():
    assert Segment(0, 0, 1, 0.0).public_score() == 0
    assert Segment(0, 0, 1, 2.0).public_score() == 200


def test_segment_merge_invariants():
    first = Segment(0, 5, 10, 1.0)
    second = Segment(10, 15, 30, 3.0)
    merged = first.merged(second)
    assert merged.pos1 == first.pos1
    assert merged.pos2 == first.pos2
    assert merged.duration == first.duration + second.duration
    assert first.score < merged.score < second.score
    assert merged.left_score == first.score
    assert merged.right_score == second.score


def test_segment_merge_rejects_gap():
    with pytest.raises(ValueError):
        Segment(0, 0, 10, 1.0).merged(Segment(11, 11, 5, 1.0))


def test_hash_time_and_duration(matcher):
    config = matcher.config
    assert matcher.hash_time(0) == 0.0
    assert matcher.hash_time(3) == pytest.approx(3 * config.item_duration_in_seconds)
    assert matcher.hash_duration(3) - matcher.hash_time(3) == pytest.approx(
        config.delay_in_seconds
    )


def test_identical_fingerprints_match_whole(matcher):
    fp = _random_fingerprint(200, 1)
    segments = matcher.match(fp, fp)
    assert len(segments) == 1
    segment = segments[0]
    assert (segment.pos1, segment.pos2, segment.duration) == (0, 0, len(fp))
    assert segment.score < 0.01
    assert matcher.segments == segments


def test_shifted_fingerprint_is_aligned(matcher):
    fp1 = _random_fingerprint(200, 2)
    fp2 = fp1[10:]
    segments = matcher.match(fp1, fp2)
    assert len(segments) == 1
    segment = segments[0]
    assert segment.pos1 == 10
    assert segment.pos2 == 0
    assert segment.duration == len(fp2)


def test_unrelated_hashes_give_no_segments(matcher):
    fp1 = [i << 20 for i in range(10)]
    fp2 = [(i + 100) << 20 for i in range(10)]
    assert matcher.match(fp1, fp2) == []
    assert matcher.segments == []


def test_empty_fingerprint_gives_no_segments(matcher):
    assert matcher.match(_random_fingerprint(20, 3), []) == []


def test_zero_threshold_rejects_everything():
    matcher = FingerprintMatcher(create_configuration(Algorithm.TEST2), 0.0)
    fp = _random_fingerprint(100, 4)
    assert matcher.match(fp, fp) == []


def test_too_long_fingerprint_raises(matcher):
    long_fp = [0] * ((1 << 19) - 2)
    with pytest.raises(ValueError):
        matcher.match(long_fp, [0])
    with pytest.raises(ValueError):
        matcher.match([0], long_fp)


def test_segments_cover_overlap_in_order(matcher):
    fp1 = _random_fingerprint(150, 5)
    fp2 = fp1[:75] + _random_fingerprint(75, 6)
    segments = matcher.match(fp1, fp2)
    assert segments
    assert segments[0].pos1 == 0
    for left, right in zip(segments, segments[1:]):
        assert left.pos1 + left.duration <= right.pos1
    assert all(s.score < matcher.match_threshold for s in segments)