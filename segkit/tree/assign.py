# -*- coding: utf-8 -*-
from typing import Any, Iterable, List, Optional

from segkit.algebra.monoid import Monoid
from segkit.tree.bounds import normalize_range
from segkit.tree.dense import DenseTree, build


class AssignSegmentTree(DenseTree):
    """Segment tree specialized for range assignment, range query.

    Assigning ``x`` precomputes ``powers[h]``, the aggregate of ``2**h``
    copies of ``x``, once per update. Pending slots hold a reference to that
    shared list, so flushing is a plain overwrite and never composes.
    """

    def __init__(self, size: int, monoid: Monoid):
        super().__init__(size, monoid)
        self._lazy: List[Optional[List[Any]]] = [None] * self._capacity

    @classmethod
    def new(cls, size: int, monoid: Monoid) -> "AssignSegmentTree":
        return cls(size, monoid)

    @classmethod
    def from_values(cls, values: Iterable[Any], monoid: Monoid) -> "AssignSegmentTree":
        return build(cls, values, monoid)

    def _height(self, k: int) -> int:
        return self._log - (k.bit_length() - 1)

    def _apply(self, k: int, powers: List[Any]) -> None:
        self._value[k] = powers[self._height(k)]
        if k < self._capacity:
            self._lazy[k] = powers

    def _push(self, k: int) -> None:
        powers = self._lazy[k]
        if powers is None:
            return
        self._apply(2 * k, powers)
        self._apply(2 * k + 1, powers)
        self._lazy[k] = None

    def _powers(self, value: Any, height: int) -> List[Any]:
        powers = [value]
        for _ in range(height):
            powers.append(self._monoid.combine(powers[-1], powers[-1]))
        return powers

    def update(self, rng: Any, value: Any) -> None:
        """Assign ``value`` to every element of ``rng``"""

        beg, end = normalize_range(rng, 0, self._size)
        if beg == end:
            return

        beg, end = beg + self._capacity, end + self._capacity
        self._push_bounds(beg, end)

        # covering nodes are at most ``(end - beg).bit_length() - 1`` levels up
        powers = self._powers(value, min((end - beg).bit_length() - 1, self._log))
        l, r = beg, end
        while l < r:
            if l & 1:
                self._apply(l, powers)
                l += 1
            if r & 1:
                r -= 1
                self._apply(r, powers)
            l >>= 1
            r >>= 1

        self._pull_bounds(beg, end)
