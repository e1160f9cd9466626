# -*- coding: utf-8 -*-
import logging
from typing import Any, Iterable, Iterator, List, Optional

import numpy as np

from segkit.algebra.monoid import MonoidAction
from segkit.tree.bounds import check_index, normalize_range
from segkit.tree.dense import get_capacity

logger = logging.getLogger(__name__)


class DualSegmentTree:
    """Dual segment tree: range update, point query.

    Leaves hold element values, internal nodes hold pending updates only
    (None when nothing is pending). A node's pending update is always newer
    than any pending update below it.
    """

    def __init__(self, size: int, action: MonoidAction):
        assert size >= 0
        self._size = size
        self._capacity = get_capacity(size)
        self._log = self._capacity.bit_length() - 1
        self._action = action
        self._update = action.update
        self._lazy: List[Optional[Any]] = [None] * self._capacity
        self._value: List[Any] = [action.query.identity() for _ in range(self._capacity)]
        logger.debug("DualSegmentTree: size=%d, capacity=%d, action=%r", size, self._capacity, action)

    @classmethod
    def new(cls, size: int, action: MonoidAction) -> "DualSegmentTree":
        return cls(size, action)

    @classmethod
    def from_values(cls, values: Iterable[Any], action: MonoidAction) -> "DualSegmentTree":
        if isinstance(values, np.ndarray):
            values = values.tolist()
        values = list(values)
        tree = cls(len(values), action)
        tree._value[: len(values)] = values
        return tree

    @property
    def action(self) -> MonoidAction:
        return self._action

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    def __getitem__(self, index: int) -> Any:
        return self.get(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def __repr__(self) -> str:
        return f"DualSegmentTree({self.to_list()!r}, action={self._action!r})"

    def _apply(self, k: int, update: Any) -> None:
        if k >= self._capacity:
            leaf = k - self._capacity
            self._value[leaf] = self._action.act(update, self._value[leaf], 1)
        else:
            pending = self._lazy[k]
            self._lazy[k] = update if pending is None else self._update.combine(update, pending)

    def _push(self, k: int) -> None:
        pending = self._lazy[k]
        if pending is None:
            return
        self._apply(2 * k, pending)
        self._apply(2 * k + 1, pending)
        self._lazy[k] = None

    def _push_path(self, leaf: int) -> None:
        for i in range(self._log, 0, -1):
            self._push(leaf >> i)

    def to_list(self) -> List[Any]:
        for k in range(1, self._capacity):
            self._push(k)
        return self._value[: self._size]

    def update(self, rng: Any, update: Any) -> None:
        """Apply ``update`` to every element of ``rng``"""

        beg, end = normalize_range(rng, 0, self._size)
        if beg == end:
            return

        l, r = beg + self._capacity, end + self._capacity
        if not self._update.is_commutative:
            for i in range(self._log, 0, -1):
                if ((l >> i) << i) != l:
                    self._push(l >> i)
                if ((r >> i) << i) != r:
                    self._push((r - 1) >> i)

        while l < r:
            if l & 1:
                self._apply(l, update)
                l += 1
            if r & 1:
                r -= 1
                self._apply(r, update)
            l >>= 1
            r >>= 1

    def get(self, index: int) -> Any:
        """Return element ``index`` with every pending update on its path applied"""

        index = check_index(index, 0, self._size)
        k = index + self._capacity

        acc = None
        for i in range(self._log, 0, -1):
            pending = self._lazy[k >> i]
            if pending is not None:
                acc = pending if acc is None else self._update.combine(acc, pending)

        value = self._value[index]
        return value if acc is None else self._action.act(acc, value, 1)

    def set(self, index: int, value: Any) -> None:
        index = check_index(index, 0, self._size)
        self._push_path(index + self._capacity)
        self._value[index] = value
