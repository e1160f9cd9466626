# -*- coding: utf-8 -*-
import itertools
import math

import numpy as np

from segkit.algebra.monoid import FnMonoid, FnMonoidAction
from segkit.algebra.ops import (
    Add,
    AddQueryAddUpdate,
    AddQueryAffineUpdate,
    AddQueryMulUpdate,
    Affine,
    Assign,
    AssignUpdate,
    BitAnd,
    BitOr,
    BitXor,
    Composite,
    Gcd,
    Lcm,
    Max,
    MaxQueryAddUpdate,
    Min,
    MinQueryAddUpdate,
    Mul,
    repeat,
)


def check_monoid(monoid, samples):
    e = monoid.identity()
    for a in samples:
        assert monoid.combine(e, a) == a
        assert monoid.combine(a, e) == a
    for a, b, c in itertools.product(samples, repeat=3):
        assert monoid.combine(a, monoid.combine(b, c)) == monoid.combine(monoid.combine(a, b), c)
    if monoid.is_commutative:
        for a, b in itertools.product(samples, repeat=2):
            assert monoid.combine(a, b) == monoid.combine(b, a)


def check_action(action, updates, values):
    for u1, u2, q in itertools.product(updates, updates, values):
        assert action.act(action.update.combine(u1, u2), q, 1) == action.act(u1, action.act(u2, q, 1), 1)
    query = action.query
    for u, q1, q2 in itertools.product(updates, values, values):
        for w1, w2 in ((1, 1), (2, 3)):
            assert action.act(u, query.combine(q1, q2), w1 + w2) == query.combine(
                action.act(u, q1, w1), action.act(u, q2, w2)
            )


def test_query_monoids():
    ints = np.random.randint(-20, 20, size=6).tolist()
    naturals = np.random.randint(0, 40, size=6).tolist()
    check_monoid(Add(), ints)
    check_monoid(Mul(), ints)
    check_monoid(Min(), ints)
    check_monoid(Max(), ints)
    check_monoid(BitAnd(8), naturals)
    check_monoid(BitOr(), naturals)
    check_monoid(BitXor(), naturals)
    check_monoid(Gcd(), naturals)
    check_monoid(Lcm(), naturals)
    check_monoid(FnMonoid(max, -math.inf, commutative=True), ints)


def test_affine_monoids():
    maps = [tuple(m) for m in np.random.randint(-5, 5, size=(5, 2)).tolist()]
    check_monoid(Affine(), maps)
    check_monoid(Composite(), maps)
    check_monoid(Assign(), [None, 1, 2, 3])

    # Affine composes right to left, Composite left to right
    f, g = (2, 1), (3, 5)
    assert Affine().combine(f, g) == (6, 11)  # f(g(x)) = 2 * (3x + 5) + 1
    assert Composite().combine(f, g) == (6, 8)  # g(f(x)) = 3 * (2x + 1) + 5
    assert not Affine.is_commutative and not Composite.is_commutative


def test_actions():
    ints = np.random.randint(-20, 20, size=4).tolist()
    maps = [tuple(m) for m in np.random.randint(-4, 4, size=(4, 2)).tolist()]
    check_action(AddQueryAddUpdate(), ints, ints)
    check_action(AddQueryMulUpdate(), ints, ints)
    check_action(AddQueryAffineUpdate(), maps, ints)
    check_action(MinQueryAddUpdate(), ints, ints + [math.inf])
    check_action(MaxQueryAddUpdate(), ints, ints + [-math.inf])
    check_action(AssignUpdate(Add()), [None] + ints, ints)
    check_action(AssignUpdate(Composite()), [None] + maps, maps)

    custom = FnMonoidAction(Add(), Add(), lambda u, q, size: q + u * size)
    check_action(custom, ints, ints)
    assert custom.uses_size


def test_repeat():
    assert repeat(Add(), 7, 0) == 0
    assert repeat(Add(), 7, 13) == 91
    assert repeat(Mul(), 2, 10) == 1024
    assert repeat(Composite(), (1, 1), 5) == (1, 5)
    for times in range(10):
        expected = Composite().identity()
        for _ in range(times):
            expected = Composite().combine(expected, (2, 1))
        assert repeat(Composite(), (2, 1), times) == expected


if __name__ == "__main__":
    test_query_monoids()
    test_affine_monoids()
    test_actions()
    test_repeat()
