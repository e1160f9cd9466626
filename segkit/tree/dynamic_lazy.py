# -*- coding: utf-8 -*-
from typing import Any, Callable, Optional

from segkit.algebra.monoid import MonoidAction
from segkit.tree.arena import ABSENT, ROOT, NodeArena
from segkit.tree.bounds import check_index, check_origin, normalize_domain, normalize_range
from segkit.tree.dynamic import DynamicSegmentTree, reserve_size
from segkit.tree.errors import PredicateError


class DynamicLazySegmentTree(DynamicSegmentTree):
    """Sparse lazy propagation segment tree: range update, range query.

    Updates materialize the nodes they write, flushing a pending update
    materializes both children. Reads never allocate: they carry the pending
    updates of the ancestors down and evaluate absent subranges as
    ``act(pending, identity, width)``.
    """

    def __init__(self, domain: Any, action: MonoidAction, capacity: int = 0):
        self._action = action
        self._update = action.update
        super().__init__(domain, action.query, capacity)

    def _make_arena(self, capacity: int) -> NodeArena:
        return NodeArena(self._monoid.identity(), capacity, lazy=True)

    @classmethod
    def new(cls, domain: Any, action: MonoidAction) -> Optional["DynamicLazySegmentTree"]:
        if normalize_domain(domain) is None:
            return None
        return cls(domain, action)

    @classmethod
    def with_capacity(
        cls, domain: Any, action: MonoidAction, expected_updates: int
    ) -> Optional["DynamicLazySegmentTree"]:
        bounds = normalize_domain(domain)
        if bounds is None:
            return None
        # a lazy write touches two paths and their siblings
        return cls(domain, action, 2 * reserve_size(bounds, expected_updates))

    @property
    def action(self) -> MonoidAction:
        return self._action

    # region two-phase protocol

    def _compose(self, newer: Optional[Any], older: Optional[Any]) -> Optional[Any]:
        if newer is None:
            return older
        if older is None:
            return newer
        return self._update.combine(newer, older)

    def _apply(self, node: int, width: int, update: Any) -> None:
        nodes = self._nodes
        nodes.value[node] = self._action.act(update, nodes.value[node], width)
        if width > 1:
            nodes.lazy[node] = self._compose(update, nodes.lazy[node])

    def _push(self, node: int, lo: int, hi: int) -> None:
        nodes = self._nodes
        pending = nodes.lazy[node]
        if pending is None:
            return
        mid = (lo + hi) // 2
        self._apply(nodes.child(node, False), mid - lo, pending)
        self._apply(nodes.child(node, True), hi - mid, pending)
        nodes.lazy[node] = None

    def _evaluate(self, node: int, width: int, pending: Optional[Any]) -> Any:
        value = self._nodes.value[node]
        return value if pending is None else self._action.act(pending, value, width)

    # endregion

    def update(self, rng: Any, update: Any) -> None:
        """Apply ``update`` to every element of ``rng``"""

        beg, end = normalize_range(rng, self._lo, self._hi)
        if beg == end:
            return
        self._update_node(ROOT, self._lo, self._hi, beg, end, update)

    def _update_node(self, node: int, lo: int, hi: int, beg: int, end: int, update: Any) -> None:
        if beg <= lo and hi <= end:
            self._apply(node, hi - lo, update)
            return

        self._push(node, lo, hi)
        mid = (lo + hi) // 2
        if beg < mid:
            self._update_node(self._nodes.child(node, False), lo, mid, beg, end, update)
        if mid < end:
            self._update_node(self._nodes.child(node, True), mid, hi, beg, end, update)
        self._pull(node)

    def set(self, index: int, value: Any) -> None:
        index = check_index(index, self._lo, self._hi)
        path = []
        node, lo, hi = ROOT, self._lo, self._hi
        while hi - lo > 1:
            path.append(node)
            self._push(node, lo, hi)
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
        return self._fold(ROOT, self._lo, self._hi, index, index + 1, None)

    def query(self, rng: Any = None) -> Any:
        beg, end = normalize_range(rng, self._lo, self._hi)
        if beg == end:
            return self._monoid.identity()
        return self._fold(ROOT, self._lo, self._hi, beg, end, None)

    def _fold(self, node: int, lo: int, hi: int, beg: int, end: int, pending: Optional[Any] = None) -> Any:
        if beg <= lo and hi <= end:
            return self._evaluate(node, hi - lo, pending)
        if node == ABSENT:
            # uniform run of identities, clipped to the queried part
            return self._evaluate(ABSENT, min(hi, end) - max(lo, beg), pending)

        pending = self._compose(pending, self._nodes.lazy[node])
        mid = (lo + hi) // 2
        if end <= mid:
            return self._fold(self._nodes.left_of(node), lo, mid, beg, end, pending)
        if mid <= beg:
            return self._fold(self._nodes.right_of(node), mid, hi, beg, end, pending)
        return self._monoid.combine(
            self._fold(self._nodes.left_of(node), lo, mid, beg, end, pending),
            self._fold(self._nodes.right_of(node), mid, hi, beg, end, pending),
        )

    # region boundary search

    def partition_end(self, start: int, pred: Callable[[Any], bool]) -> int:
        start = check_origin(start, self._lo, self._hi)
        identity = self._monoid.identity()
        if not pred(identity):
            raise PredicateError("predicate must hold for the identity element")

        combine = self._monoid.combine
        nodes = self._nodes
        acc = identity

        def descend(node: int, lo: int, hi: int, pending: Optional[Any]) -> Optional[int]:
            nonlocal acc
            if hi <= start or (node == ABSENT and pending is None):
                return None
            if start <= lo:
                merged = combine(acc, self._evaluate(node, hi - lo, pending))
                if pred(merged):
                    acc = merged
                    return None
                if hi - lo == 1:
                    return lo
            pending = self._compose(pending, nodes.lazy[node])
            mid = (lo + hi) // 2
            found = descend(nodes.left_of(node), lo, mid, pending)
            if found is None:
                found = descend(nodes.right_of(node), mid, hi, pending)
            return found

        found = descend(ROOT, self._lo, self._hi, None)
        return self._hi if found is None else found

    def partition_start(self, end: int, pred: Callable[[Any], bool]) -> int:
        end = check_origin(end, self._lo, self._hi)
        identity = self._monoid.identity()
        if not pred(identity):
            raise PredicateError("predicate must hold for the identity element")

        combine = self._monoid.combine
        nodes = self._nodes
        acc = identity

        def descend(node: int, lo: int, hi: int, pending: Optional[Any]) -> Optional[int]:
            nonlocal acc
            if end <= lo or (node == ABSENT and pending is None):
                return None
            if hi <= end:
                merged = combine(self._evaluate(node, hi - lo, pending), acc)
                if pred(merged):
                    acc = merged
                    return None
                if hi - lo == 1:
                    return hi
            pending = self._compose(pending, nodes.lazy[node])
            mid = (lo + hi) // 2
            found = descend(nodes.right_of(node), mid, hi, pending)
            if found is None:
                found = descend(nodes.left_of(node), lo, mid, pending)
            return found

        found = descend(ROOT, self._lo, self._hi, None)
        return self._lo if found is None else found

    # endregion
