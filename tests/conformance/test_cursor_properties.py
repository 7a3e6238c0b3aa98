"""
Cursor Conformance Tests

INVARIANTS:

    ∀ cursor s, n ≥ 0:
        to_list(take(n, s)) = to_list(s)[:n]
        to_list(drop(n, s)) = to_list(s)[n:]
        size(take(n, s)) + size(drop(n, s)) = size(s)
        accumulate(s, z) = z + Σ to_list(s)
        advance(exhausted s) = s

Algorithms never change the cursor they are given.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from binomial import (
    CountedCursor, SpanCursor, PointerCursor,
    accumulate, size, drop, take, span, to_list,
)


buffers = st.lists(st.integers(min_value=-1000, max_value=1000), max_size=50)
counts = st.integers(min_value=0, max_value=60)


class TestTakeDropProperties:
    """Property-based tests for take and drop."""

    @given(buffers, counts)
    @settings(max_examples=200)
    def test_take_is_prefix(self, data, n):
        assert to_list(take(n, CountedCursor.over(data))) == data[:n]

    @given(buffers, counts)
    @settings(max_examples=200)
    def test_drop_is_suffix(self, data, n):
        assert to_list(drop(n, span(data))) == data[n:]

    @given(buffers, counts)
    def test_take_drop_partition(self, data, n):
        s = CountedCursor.over(data)
        assert size(take(n, s)) + size(drop(n, s)) == size(s) == len(data)

    @given(buffers, counts)
    def test_source_unchanged(self, data, n):
        s = CountedCursor.over(data)
        before = to_list(s)
        to_list(take(n, s))
        drop(n, s)
        assert to_list(s) == before

    @given(st.lists(st.integers(min_value=1, max_value=9), max_size=30), counts)
    def test_take_bounds_pointer_over_terminated_buffer(self, data, n):
        terminated = data + [0]
        p = PointerCursor(terminated, sentinel=0)
        assert to_list(take(n, p)) == data[:n]

    @given(st.lists(st.integers(min_value=1, max_value=9), max_size=30), counts)
    def test_take_bounds_pointer_over_unterminated_buffer(self, data, n):
        p = PointerCursor(data, sentinel=0) if data else PointerCursor()
        n = min(n, len(data))
        assert to_list(take(n, p)) == data[:n]
        assert size(take(n, p)) == n


class TestAccumulateProperties:
    """Property-based tests for accumulate and size."""

    @given(buffers, st.integers(min_value=-10, max_value=10))
    def test_accumulate_is_seeded_sum(self, data, seed):
        assert accumulate(CountedCursor.over(data), seed) == seed + sum(data)

    @given(buffers, st.integers(min_value=0, max_value=50), st.integers(min_value=0, max_value=50))
    def test_span_and_counted_agree(self, data, a, b):
        start, stop = sorted((min(a, len(data)), min(b, len(data))))
        s = SpanCursor(data, start, stop)
        c = CountedCursor(data, stop - start, start)
        assert to_list(s) == to_list(c) == data[start:stop]
        assert accumulate(s) == accumulate(c)

    @given(buffers)
    def test_exhausted_advance_is_identity(self, data):
        for s in (CountedCursor.over(data), span(data)):
            end = drop(len(data), s)
            assert not end.has_more()
            assert end.advance() == end
            assert end == s.end()

    @given(buffers, buffers)
    def test_size_offset(self, xs, ys):
        i = CountedCursor.over(xs)
        j = span(ys)
        assert size(i, size(j)) == size(i) + size(j) == len(xs) + len(ys)

    @given(st.lists(st.floats(min_value=-1e6, max_value=1e6), max_size=40))
    def test_float_accumulate(self, data):
        assert accumulate(span(data), 0.0) == pytest.approx(sum(data), abs=1e-6)
