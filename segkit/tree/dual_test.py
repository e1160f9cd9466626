# -*- coding: utf-8 -*-
import numpy as np
import pytest

from segkit.algebra.ops import AddQueryAddUpdate, AddQueryAffineUpdate, AssignUpdate, Composite
from segkit.tree.dual import DualSegmentTree
from segkit.tree.errors import RangeError


def random_int():
    return int(np.random.randint(-10, 10))


def random_map():
    return tuple(np.random.randint(-3, 4, size=2).tolist())


def simulate(action, tree, values, steps, make_update, make_value):
    size = len(values)
    for _ in range(steps):
        left, right = sorted(np.random.randint(0, size + 1, size=2).tolist())
        kind = np.random.randint(3)
        if kind == 0:
            update = make_update()
            tree.update((left, right), update)
            for i in range(left, right):
                values[i] = action.act(update, values[i], 1)
        elif kind == 1 and left < size:
            values[left] = make_value()
            tree.set(left, values[left])
        else:
            assert [tree.get(i) for i in range(size)] == values
    assert tree.to_list() == values


def test_DualSegmentTree_add():
    action = AddQueryAddUpdate()
    n = 13
    tree = DualSegmentTree.new(n, action)
    for left in range(n):
        for right in range(left, n):
            tree.update((left, right + 1), 1)
    for i in range(n):
        assert tree.get(i) == (i + 1) * (n - i)

    values = np.random.randint(-10, 10, size=30).tolist()
    tree = DualSegmentTree.from_values(values, action)
    simulate(action, tree, values, 300, lambda: int(np.random.randint(-5, 6)), random_int)


def test_DualSegmentTree_affine_order():
    action = AddQueryAffineUpdate()
    tree = DualSegmentTree.new(100, action)
    tree.update((None, 75), (2, 3))  # x -> 2x + 3
    tree.update((25, None), (5, 7))  # x -> 5x + 7
    assert tree[10] == 3
    assert tree[50] == 5 * 3 + 7
    assert tree[80] == 7

    tree[50] = 1
    tree.update((0, 100), (0, 4))
    tree.update((40, 60), (3, 0))
    assert tree[50] == 12 and tree[0] == 4 and tree[99] == 4


def test_DualSegmentTree_affine_random():
    action = AddQueryAffineUpdate()
    for size in [1, 7, 16, 45]:
        values = np.random.randint(-10, 10, size=size).tolist()
        tree = DualSegmentTree.from_values(values, action)
        simulate(action, tree, values, 200, random_map, random_int)


def test_DualSegmentTree_assign():
    action = AssignUpdate(Composite())
    values = [(1, 0)] * 12
    tree = DualSegmentTree.from_values(values, action)
    simulate(action, tree, values, 200, random_map, random_map)


def test_DualSegmentTree_errors():
    tree = DualSegmentTree.new(4, AddQueryAddUpdate())
    tree.update((2, 2), 5)
    assert list(tree) == [0, 0, 0, 0]
    with pytest.raises(RangeError):
        tree.get(4)
    with pytest.raises(RangeError):
        tree.update((0, 5), 1)
    assert len(DualSegmentTree.new(0, AddQueryAddUpdate())) == 0


if __name__ == "__main__":
    test_DualSegmentTree_add()
    test_DualSegmentTree_affine_order()
    test_DualSegmentTree_affine_random()
    test_DualSegmentTree_assign()
    test_DualSegmentTree_errors()
