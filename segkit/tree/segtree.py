# -*- coding: utf-8 -*-
from typing import Any, Iterable

from segkit.algebra.monoid import Monoid
from segkit.tree.dense import DenseTree, build


class SegmentTree(DenseTree):
    """Segment tree: point update, range query"""

    @classmethod
    def new(cls, size: int, monoid: Monoid) -> "SegmentTree":
        return cls(size, monoid)

    @classmethod
    def from_values(cls, values: Iterable[Any], monoid: Monoid) -> "SegmentTree":
        return build(cls, values, monoid)

    def _push_bounds(self, l: int, r: int) -> None:
        pass

    def _push_path(self, leaf: int) -> None:
        pass

    def _push_all(self) -> None:
        pass

