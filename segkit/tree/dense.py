# -*- coding: utf-8 -*-
import logging
from typing import Any, Callable, Iterable, Iterator, List

import numpy as np

from segkit.algebra.monoid import Monoid
from segkit.tree.bounds import check_index, check_origin, normalize_range
from segkit.tree.errors import PredicateError

logger = logging.getLogger(__name__)


def get_capacity(size: int) -> int:
    capacity = 1
    while capacity < size:
        capacity <<= 1
    return capacity


def get_widths(size: int, capacity: int) -> np.ndarray:
    """Number of real (non padding) leaves under every node, root at 1"""

    width = np.zeros([capacity * 2], dtype=np.int64)
    width[capacity : capacity + size] = 1
    beg = capacity
    while beg > 1:
        end, beg = beg, beg >> 1
        width[beg:end] = width[2 * beg : 2 * end : 2] + width[2 * beg + 1 : 2 * end : 2]
    return width


class DenseTree:
    """Array backed complete binary tree.

    Node ``k`` has children ``2k`` and ``2k + 1``, leaf ``i`` lives at
    ``capacity + i``. Subclasses with pending updates override ``_push``
    (flush a node's pending update into its children before descending) and
    ``_apply``; ``_pull`` recomputes an aggregate after ascending.
    """

    def __init__(self, size: int, monoid: Monoid):
        assert size >= 0
        self._size = size
        self._capacity = get_capacity(size)
        self._log = self._capacity.bit_length() - 1
        self._monoid = monoid
        self._value: List[Any] = [monoid.identity() for _ in range(self._capacity * 2)]
        logger.debug(
            "%s: size=%d, capacity=%d, monoid=%r",
            self.__class__.__name__,
            size,
            self._capacity,
            monoid,
        )

    @property
    def monoid(self) -> Monoid:
        return self._monoid

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    def __repr__(self) -> str:
        return "{}({!r}, monoid={!r})".format(self.__class__.__name__, self.to_list(), self._monoid)

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, (int, np.integer)) and not isinstance(index, bool):
            return self.get(index)
        return self.query(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def _fill(self, values: Iterable[Any]) -> None:
        count = 0
        for i, value in enumerate(values):
            assert i < self._size, "too many values"
            self._value[self._capacity + i] = value
            count += 1
        assert count == self._size, "too few values"
        for k in range(self._capacity - 1, 0, -1):
            self._pull(k)

    # region two-phase protocol

    def _push(self, k: int) -> None:
        pass

    def _pull(self, k: int) -> None:
        self._value[k] = self._monoid.combine(self._value[2 * k], self._value[2 * k + 1])

    def _push_path(self, leaf: int) -> None:
        """Flush every strict ancestor of ``leaf``, root first"""

        for i in range(self._log, 0, -1):
            self._push(leaf >> i)

    def _push_bounds(self, l: int, r: int) -> None:
        """Flush the ancestors of the boundaries of [l, r) (tree positions)"""

        for i in range(self._log, 0, -1):
            if ((l >> i) << i) != l:
                self._push(l >> i)
            if ((r >> i) << i) != r:
                self._push((r - 1) >> i)

    def _pull_bounds(self, l: int, r: int) -> None:
        for i in range(1, self._log + 1):
            if ((l >> i) << i) != l:
                self._pull(l >> i)
            if ((r >> i) << i) != r:
                self._pull((r - 1) >> i)

    def _push_all(self) -> None:
        for k in range(1, self._capacity):
            self._push(k)

    # endregion

    def to_list(self) -> List[Any]:
        self._push_all()
        beg = self._capacity
        return self._value[beg : beg + self._size]

    def get(self, index: int) -> Any:
        index = check_index(index, 0, self._size) + self._capacity
        self._push_path(index)
        return self._value[index]

    def set(self, index: int, value: Any) -> None:
        index = check_index(index, 0, self._size) + self._capacity
        self._push_path(index)
        self._value[index] = value
        while index > 1:
            index >>= 1
            self._pull(index)

    def update_with(self, index: int, fn: Callable[[Any], Any]) -> None:
        """Replace element ``index`` with ``fn(element)``"""

        self.set(index, fn(self.get(index)))

    def all(self) -> Any:
        return self._value[1] if self._size > 0 else self._monoid.identity()

    def query(self, rng: Any = None) -> Any:
        """Return the combined elements of ``rng`` in index order"""

        beg, end = normalize_range(rng, 0, self._size)
        if beg == end:
            return self._monoid.identity()

        combine = self._monoid.combine
        beg, end = beg + self._capacity, end + self._capacity
        self._push_bounds(beg, end)

        left = right = self._monoid.identity()
        while beg < end:
            if beg & 1:
                left = combine(left, self._value[beg])
                beg += 1
            if end & 1:
                end -= 1
                right = combine(self._value[end], right)
            beg >>= 1
            end >>= 1

        return combine(left, right)

    # region boundary search

    def _check_predicate(self, pred: Callable[[Any], bool]) -> Any:
        identity = self._monoid.identity()
        if not pred(identity):
            raise PredicateError("predicate must hold for the identity element")
        return identity

    def partition_end(self, start: int, pred: Callable[[Any], bool]) -> int:
        """Return the largest end with pred(self.query((start, end))) true.

        ``pred`` must accept the identity and flip at most once as end grows.
        """

        start = check_origin(start, 0, self._size)
        acc = self._check_predicate(pred)
        if start == self._size:
            return self._size

        combine = self._monoid.combine
        index = start + self._capacity
        self._push_path(index)
        while True:
            while index & 1 == 0:
                index >>= 1
            merged = combine(acc, self._value[index])
            if not pred(merged):
                while index < self._capacity:
                    self._push(index)
                    index <<= 1
                    merged = combine(acc, self._value[index])
                    if pred(merged):
                        acc = merged
                        index += 1
                return index - self._capacity
            acc = merged
            index += 1
            if index & -index == index:
                return self._size

    def partition_start(self, end: int, pred: Callable[[Any], bool]) -> int:
        """Return the smallest start with pred(self.query((start, end))) true.

        ``pred`` must accept the identity and flip at most once as start shrinks.
        """

        end = check_origin(end, 0, self._size)
        acc = self._check_predicate(pred)
        if end == 0:
            return 0

        combine = self._monoid.combine
        index = end + self._capacity
        self._push_path(index - 1)
        while True:
            index -= 1
            while index > 1 and index & 1:
                index >>= 1
            merged = combine(self._value[index], acc)
            if not pred(merged):
                while index < self._capacity:
                    self._push(index)
                    index = 2 * index + 1
                    merged = combine(self._value[index], acc)
                    if pred(merged):
                        acc = merged
                        index -= 1
                return index + 1 - self._capacity
            acc = merged
            if index & -index == index:
                return 0

    # endregion


def build(cls: type, values: Iterable[Any], *args: Any, **kwargs: Any) -> Any:
    if isinstance(values, np.ndarray):
        values = values.tolist()
    values = list(values)
    tree = cls(len(values), *args, **kwargs)
    tree._fill(values)
    return tree
