# -*- coding: utf-8 -*-
import operator
from functools import reduce

import numpy as np
import pytest
from pytest import approx

from segkit.algebra.monoid import FnMonoid
from segkit.algebra.ops import Add, Composite, Max, Min
from segkit.tree.bounds import Excluded, Included, Range
from segkit.tree.errors import PredicateError, RangeError
from segkit.tree.segtree import SegmentTree


def fold(monoid, values):
    return reduce(monoid.combine, values, monoid.identity())


def naive_partition_end(monoid, values, start, pred):
    acc = monoid.identity()
    end = start
    while end < len(values) and pred(monoid.combine(acc, values[end])):
        acc = monoid.combine(acc, values[end])
        end += 1
    return end


def naive_partition_start(monoid, values, end, pred):
    acc = monoid.identity()
    start = end
    while start > 0 and pred(monoid.combine(values[start - 1], acc)):
        acc = monoid.combine(values[start - 1], acc)
        start -= 1
    return start


def test_SegmentTree_scenario():
    st = SegmentTree.new(8, Add())
    st.set(3, 5)
    st.set(6, 2)
    assert st.query((0, 8)) == 7
    assert st.query((4, 6)) == 0
    assert st.query((3, 4)) == 5
    assert st.query(Range(Excluded(2), Included(3))) == 5
    assert st[3] == 5 and st[0:4] == 5 and st.all() == 7
    assert list(st) == [0, 0, 0, 5, 0, 0, 2, 0]


def test_SegmentTree_matches_fold():
    for size in [1, 2, 5, 8, 13, 32, 50]:
        data = np.random.randint(-100, 100, size=size).tolist()
        st = SegmentTree.from_values(data, Add())
        assert len(st) == size
        assert st.to_list() == data

        for _ in range(size):
            i = int(np.random.randint(size))
            data[i] = int(np.random.randint(-100, 100))
            st[i] = data[i]

        for left in range(size + 1):
            for right in range(left, size + 1):
                assert st.query((left, right)) == sum(data[left:right])
                assert st.query(slice(left, right)) == sum(data[left:right])


def test_SegmentTree_non_commutative():
    monoid = Composite()
    size = 23
    maps = [tuple(m) for m in np.random.randint(-3, 4, size=(size, 2)).tolist()]
    st = SegmentTree.from_values(maps, monoid)
    for left in range(size + 1):
        for right in range(left, size + 1):
            assert st.query((left, right)) == fold(monoid, maps[left:right])

    st.update_with(4, lambda m: (m[0] + 1, m[1]))
    maps[4] = (maps[4][0] + 1, maps[4][1])
    assert st.all() == fold(monoid, maps)


def test_SegmentTree_min_max():
    data = np.random.rand(37).tolist()
    st_min = SegmentTree.from_values(np.array(data), Min())
    st_max = SegmentTree.from_values(data, FnMonoid(max, -np.inf, commutative=True))
    for left in range(len(data)):
        for right in range(left + 1, len(data) + 1):
            assert st_min.query((left, right)) == min(data[left:right])
            assert st_max.query((left, right)) == max(data[left:right])
    assert SegmentTree.new(5, Max()).all() == -np.inf


def test_SegmentTree_empty_range():
    st = SegmentTree.from_values([1, 2, 3], Add())
    for rng in [(0, 0), (3, 3), Range(Excluded(1), Included(1))]:
        assert st.query(rng) == 0

    empty = SegmentTree.new(0, Add())
    assert len(empty) == 0
    assert empty.query() == 0 and empty.all() == 0
    assert empty.partition_end(0, lambda v: v < 1) == 0
    assert empty.partition_start(0, lambda v: v < 1) == 0


def test_SegmentTree_out_of_range():
    st = SegmentTree.new(10, Add())
    with pytest.raises(RangeError):
        st.set(10, 1)
    with pytest.raises(RangeError):
        st.get(-1)
    with pytest.raises(RangeError):
        st.query((0, 11))
    with pytest.raises(IndexError):
        st.query((6, 5))
    with pytest.raises(RangeError):
        st.partition_end(11, lambda v: True)


def test_SegmentTree_partition():
    monoid = Add()
    for size in [1, 2, 7, 16, 29]:
        data = np.random.randint(0, 4, size=size).tolist()
        st = SegmentTree.from_values(data, monoid)
        for limit in range(0, sum(data) + 2):
            pred = lambda v: v <= limit  # noqa: E731
            for origin in range(size + 1):
                assert st.partition_end(origin, pred) == naive_partition_end(
                    monoid, data, origin, pred
                )
                assert st.partition_start(origin, pred) == naive_partition_start(
                    monoid, data, origin, pred
                )

    with pytest.raises(PredicateError):
        st.partition_end(0, lambda v: v < 0)


def test_SegmentTree_partition_non_commutative():
    monoid = Composite()
    maps = [tuple(m) for m in np.random.randint(1, 3, size=(20, 2)).tolist()]
    st = SegmentTree.from_values(maps, monoid)
    for limit in [1, 2, 10, 100, 10 ** 6]:
        pred = lambda f: f[0] + f[1] <= limit  # noqa: E731
        for origin in range(len(maps) + 1):
            assert st.partition_end(origin, pred) == naive_partition_end(monoid, maps, origin, pred)
            assert st.partition_start(origin, pred) == naive_partition_start(
                monoid, maps, origin, pred
            )


def test_SegmentTree_from_array():
    data = np.random.rand(50) * 100

    st = SegmentTree.from_values(data, Add())

    assert len(data) == len(st)
    assert all([a == approx(b) for a, b in zip(data, st)])
    assert st.query() == approx(sum(st))

    for left in range(len(st)):
        for right in range(left + 1, len(st)):
            assert st.query((left, right)) == approx(sum(data[left:right]))

    st = SegmentTree.from_values(range(10), Add())
    assert st.query() == reduce(operator.add, range(10))
    assert st.partition_end(0, lambda s: s < 1) == 1
    assert st.partition_end(0, lambda s: s < 45) == 9


if __name__ == "__main__":
    test_SegmentTree_scenario()
    test_SegmentTree_matches_fold()
    test_SegmentTree_non_commutative()
    test_SegmentTree_min_max()
    test_SegmentTree_empty_range()
    test_SegmentTree_out_of_range()
    test_SegmentTree_partition()
    test_SegmentTree_partition_non_commutative()
    test_SegmentTree_from_array()
