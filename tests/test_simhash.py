from hypothesis import given
from hypothesis import strategies as st

from chromafp.simhash import simhash

uint32 = st.integers(min_value=0, max_value=0xFFFFFFFF)


def test_empty_is_zero():
    assert simhash([]) == 0


@given(uint32)
def test_single_value_is_itself(value):
    assert simhash([value]) == value


@given(uint32, st.integers(min_value=1, max_value=5))
def test_repeated_value_is_itself(value, times):
    assert simhash([value] * times) == value


@given(uint32)
def test_value_and_complement_cancel(value):
    assert simhash([value, value ^ 0xFFFFFFFF]) == 0


@given(st.lists(uint32, max_size=20))
def test_order_does_not_matter(values):
    assert simhash(values) == simhash(list(reversed(values)))


@given(st.lists(uint32, max_size=20))
def test_result_fits_in_32_bits(values):
    assert 0 <= simhash(values) <= 0xFFFFFFFF


def test_majority_wins():
    assert simhash([0b101, 0b100, 0b001]) == 0b101


def test_top_bit_is_counted():
    top = 1 << 31
    assert simhash([top, top, 0]) == top