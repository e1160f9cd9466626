# -*- coding: utf-8 -*-
from typing import Any, Iterable, List, Optional

from segkit.algebra.monoid import MonoidAction
from segkit.tree.bounds import normalize_range
from segkit.tree.dense import DenseTree, build, get_widths


class LazySegmentTree(DenseTree):
    """Lazy propagation segment tree: range update, range query.

    Every internal node keeps a pending update (None when nothing is pending)
    that has already been applied to its own aggregate but not to its children.
    """

    def __init__(self, size: int, action: MonoidAction):
        super().__init__(size, action.query)
        self._action = action
        self._update = action.update
        self._width = get_widths(size, self._capacity).tolist()
        self._lazy: List[Optional[Any]] = [None] * self._capacity

    @classmethod
    def new(cls, size: int, action: MonoidAction) -> "LazySegmentTree":
        return cls(size, action)

    @classmethod
    def from_values(cls, values: Iterable[Any], action: MonoidAction) -> "LazySegmentTree":
        return build(cls, values, action)

    @property
    def action(self) -> MonoidAction:
        return self._action

    def _apply(self, k: int, update: Any) -> None:
        self._value[k] = self._action.act(update, self._value[k], self._width[k])
        if k < self._capacity:
            pending = self._lazy[k]
            self._lazy[k] = update if pending is None else self._update.combine(update, pending)

    def _push(self, k: int) -> None:
        pending = self._lazy[k]
        if pending is None:
            return
        self._apply(2 * k, pending)
        self._apply(2 * k + 1, pending)
        self._lazy[k] = None

    def update(self, rng: Any, update: Any) -> None:
        """Apply ``update`` to every element of ``rng``"""

        beg, end = normalize_range(rng, 0, self._size)
        if beg == end:
            return

        beg, end = beg + self._capacity, end + self._capacity
        self._push_bounds(beg, end)

        l, r = beg, end
        while l < r:
            if l & 1:
                self._apply(l, update)
                l += 1
            if r & 1:
                r -= 1
                self._apply(r, update)
            l >>= 1
            r >>= 1

        self._pull_bounds(beg, end)
