from hypothesis import given
from hypothesis import strategies as st

from chromafp.compressor import (
    compress_fingerprint,
    pack_int3_array,
    pack_int5_array,
    unpack_int3_array,
    unpack_int5_array,
)


def test_empty_fingerprint_is_only_header():
    assert compress_fingerprint([]) == b"\x00\x00\x00\x00"


def test_one_item_one_bit():
    assert compress_fingerprint([1]) == b"\x00\x00\x00\x01\x01"


def test_one_item_exceptional_bit():
    assert compress_fingerprint([1 << 8]) == bytes([0, 0, 0, 1, 7, 2])


def test_header_carries_algorithm_and_count():
    fingerprint = [5, 9, 1 << 31, 0, 77]
    data = compress_fingerprint(fingerprint, 3)
    assert data[0] == 3
    assert data[1:4] == len(fingerprint).to_bytes(3, "big")


def test_algorithm_is_truncated_to_a_byte():
    assert compress_fingerprint([], 257)[0] == 1


@given(st.lists(st.integers(0, 7), max_size=60))
def test_int3_round_trip(values):
    packed = pack_int3_array(values)
    assert len(packed) == (len(values) * 3 + 7) // 8
    assert unpack_int3_array(packed)[: len(values)] == values


@given(st.lists(st.integers(0, 31), max_size=60))
def test_int5_round_trip(values):
    packed = pack_int5_array(values)
    assert len(packed) == (len(values) * 5 + 7) // 8
    assert unpack_int5_array(packed)[: len(values)] == values


@given(st.binary(max_size=40))
def test_unpacked_counts(data):
    assert len(unpack_int3_array(data)) == len(data) * 8 // 3
    assert len(unpack_int5_array(data)) == len(data) * 8 // 5


@given(st.lists(st.integers(0, 2**32 - 1), max_size=30))
def test_compressed_length_grows_with_content(fingerprint):
    data = compress_fingerprint(fingerprint)
    assert len(data) >= 4 + (len(fingerprint) * 3 + 7) // 8