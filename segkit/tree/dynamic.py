# -*- coding: utf-8 -*-
import logging
from typing import Any, Callable, List, Optional, Tuple

import numpy as np

from segkit.algebra.monoid import Monoid
from segkit.tree.arena import ABSENT, ROOT, NodeArena
from segkit.tree.bounds import check_index, check_origin, normalize_domain, normalize_range
from segkit.tree.errors import EmptyDomainError, PredicateError

logger = logging.getLogger(__name__)


def reserve_size(domain: Tuple[int, int], expected_updates: int) -> int:
    """Nodes touched by ``expected_updates`` root-to-leaf writes"""

    depth = (domain[1] - domain[0] - 1).bit_length()
    return max(expected_updates, 0) * (depth + 1)


class DynamicSegmentTree:
    """Sparse segment tree over ``[lo, hi)`` with ``0 <= lo < hi <= 2**64``.

    Nodes are materialized on the first write into their subrange, an absent
    child stands for a subrange of identity elements.
    """

    def __init__(self, domain: Any, monoid: Monoid, capacity: int = 0):
        bounds = normalize_domain(domain)
        if bounds is None:
            raise EmptyDomainError(f"domain {domain!r} is empty")
        self._lo, self._hi = bounds
        self._monoid = monoid
        self._nodes = self._make_arena(capacity)
        logger.debug(
            "%s: domain=[%d, %d), reserved=%d, monoid=%r",
            self.__class__.__name__,
            self._lo,
            self._hi,
            self._nodes.capacity,
            monoid,
        )

    def _make_arena(self, capacity: int) -> NodeArena:
        return NodeArena(self._monoid.identity(), capacity)

    @classmethod
    def new(cls, domain: Any, monoid: Monoid) -> Optional["DynamicSegmentTree"]:
        """Return a tree over ``domain``, or None if the domain is empty"""

        if normalize_domain(domain) is None:
            return None
        return cls(domain, monoid)

    @classmethod
    def with_capacity(
        cls, domain: Any, monoid: Monoid, expected_updates: int
    ) -> Optional["DynamicSegmentTree"]:
        bounds = normalize_domain(domain)
        if bounds is None:
            return None
        return cls(domain, monoid, reserve_size(bounds, expected_updates))

    @property
    def monoid(self) -> Monoid:
        return self._monoid

    @property
    def domain(self) -> range:
        return range(self._lo, self._hi)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def size(self) -> int:
        """Length of the domain, up to 2**64 so it is not exposed as len()"""
        return self._hi - self._lo

    @property
    def capacity(self) -> int:
        """Node slots available before the arena has to grow"""
        return self._nodes.capacity

    def __bool__(self) -> bool:
        return True

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, (int, np.integer)) and not isinstance(index, bool):
            return self.get(index)
        return self.query(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def __repr__(self) -> str:
        return "{}(domain=[{}, {}), nodes={}, monoid={!r})".format(
            self.__class__.__name__, self._lo, self._hi, self.node_count, self._monoid
        )

    def clear(self) -> None:
        """Drop every node, all elements become the identity again.

        Storage reserved by ``with_capacity`` stays reserved.
        """

        logger.debug("%s: clearing %d nodes", self.__class__.__name__, self.node_count)
        self._nodes.reset()

    def _pull(self, node: int) -> None:
        nodes = self._nodes
        nodes.value[node] = self._monoid.combine(
            nodes.value[nodes.left_of(node)], nodes.value[nodes.right_of(node)]
        )

    def set(self, index: int, value: Any) -> None:
        index = check_index(index, self._lo, self._hi)
        path: List[int] = []
        node, lo, hi = ROOT, self._lo, self._hi
        while hi - lo > 1:
            path.append(node)
            mid = (lo + hi) // 2
            if index < mid:
                node, hi = self._nodes.child(node, False), mid
            else:
                node, lo = self._nodes.child(node, True), mid

        self._nodes.value[node] = value
        for node in reversed(path):
            self._pull(node)

    def get(self, index: int) -> Any:
        index = check_index(index, self._lo, self._hi)
        nodes = self._nodes
        node, lo, hi = ROOT, self._lo, self._hi
        while hi - lo > 1 and node != ABSENT:
            mid = (lo + hi) // 2
            if index < mid:
                node, hi = nodes.left_of(node), mid
            else:
                node, lo = nodes.right_of(node), mid
        return nodes.value[node]

    def update_with(self, index: int, fn: Callable[[Any], Any]) -> None:
        self.set(index, fn(self.get(index)))

    def all(self) -> Any:
        return self._nodes.value[ROOT]

    def query(self, rng: Any = None) -> Any:
        """Return the combined elements of ``rng`` in index order"""

        beg, end = normalize_range(rng, self._lo, self._hi)
        if beg == end:
            return self._monoid.identity()
        return self._fold(ROOT, self._lo, self._hi, beg, end)

    def _fold(self, node: int, lo: int, hi: int, beg: int, end: int) -> Any:
        if node == ABSENT:
            return self._monoid.identity()
        if beg <= lo and hi <= end:
            return self._nodes.value[node]

        mid = (lo + hi) // 2
        if end <= mid:
            return self._fold(self._nodes.left_of(node), lo, mid, beg, end)
        if mid <= beg:
            return self._fold(self._nodes.right_of(node), mid, hi, beg, end)
        return self._monoid.combine(
            self._fold(self._nodes.left_of(node), lo, mid, beg, end),
            self._fold(self._nodes.right_of(node), mid, hi, beg, end),
        )

    # region boundary search

    def partition_end(self, start: int, pred: Callable[[Any], bool]) -> int:
        """Return the largest end with pred(self.query((start, end))) true"""

        start = check_origin(start, self._lo, self._hi)
        identity = self._monoid.identity()
        if not pred(identity):
            raise PredicateError("predicate must hold for the identity element")

        combine = self._monoid.combine
        nodes = self._nodes
        acc = identity

        def descend(node: int, lo: int, hi: int) -> Optional[int]:
            nonlocal acc
            if hi <= start or node == ABSENT:
                return None
            if start <= lo:
                merged = combine(acc, nodes.value[node])
                if pred(merged):
                    acc = merged
                    return None
                if hi - lo == 1:
                    return lo
            mid = (lo + hi) // 2
            found = descend(nodes.left_of(node), lo, mid)
            if found is None:
                found = descend(nodes.right_of(node), mid, hi)
            return found

        found = descend(ROOT, self._lo, self._hi)
        return self._hi if found is None else found

    def partition_start(self, end: int, pred: Callable[[Any], bool]) -> int:
        """Return the smallest start with pred(self.query((start, end))) true"""

        end = check_origin(end, self._lo, self._hi)
        identity = self._monoid.identity()
        if not pred(identity):
            raise PredicateError("predicate must hold for the identity element")

        combine = self._monoid.combine
        nodes = self._nodes
        acc = identity

        def descend(node: int, lo: int, hi: int) -> Optional[int]:
            nonlocal acc
            if end <= lo or node == ABSENT:
                return None
            if hi <= end:
                merged = combine(nodes.value[node], acc)
                if pred(merged):
                    acc = merged
                    return None
                if hi - lo == 1:
                    return hi
            mid = (lo + hi) // 2
            found = descend(nodes.right_of(node), mid, hi)
            if found is None:
                found = descend(nodes.left_of(node), lo, mid)
            return found

        found = descend(ROOT, self._lo, self._hi)
        return self._lo if found is None else found

    # endregion
