# -*- coding: utf-8 -*-
"""Conversion of range expressions into canonical half-open ``(lo, hi)`` pairs.

Supported expressions:

    None or ...            the whole domain
    Range(start, end)      any mix of Included / Excluded / UNBOUNDED
    slice(start, stop)     start included, stop excluded, None is unbounded
    range(start, stop)     step 1 only
    (start, stop)          half open
    i                      the single index [i, i + 1)
"""
from dataclasses import dataclass
from numbers import Integral
from typing import Any, Optional, Tuple, Union

import numpy as np

from segkit.tree.errors import BoundOverflowError, RangeError

INDEX_MAX = int(np.iinfo(np.uint64).max)
INDEX_LIMIT = INDEX_MAX + 1  # exclusive end of the whole index space


@dataclass(frozen=True)
class Included:
    value: int


@dataclass(frozen=True)
class Excluded:
    value: int


class _Unbounded:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNBOUNDED"

    def __reduce__(self):
        return (_Unbounded, ())


UNBOUNDED = _Unbounded()

Bound = Union[Included, Excluded, _Unbounded]


@dataclass(frozen=True)
class Range:
    start: Bound = UNBOUNDED
    end: Bound = UNBOUNDED


def _as_index(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"index must be an integer, got {type(value).__name__}")
    return int(value)


def _bound(value: Optional[Any], kind: type) -> Bound:
    return UNBOUNDED if value is None else kind(_as_index(value))


def to_range(expr: Any) -> Range:
    """Lift any supported range expression into a ``Range``"""

    if expr is None or expr is Ellipsis:
        return Range()
    if isinstance(expr, Range):
        return expr
    if isinstance(expr, slice):
        if expr.step not in (None, 1):
            raise ValueError(f"slice step must be 1, got {expr.step}")
        return Range(_bound(expr.start, Included), _bound(expr.stop, Excluded))
    if isinstance(expr, range):
        if expr.step != 1:
            raise ValueError(f"range step must be 1, got {expr.step}")
        return Range(Included(expr.start), Excluded(expr.stop))
    if isinstance(expr, tuple):
        if len(expr) != 2:
            raise ValueError(f"range tuple must be (start, stop), got {expr!r}")
        return Range(_bound(expr[0], Included), _bound(expr[1], Excluded))
    if isinstance(expr, Integral) and not isinstance(expr, bool):
        return Range(Included(int(expr)), Included(int(expr)))
    raise TypeError(f"unsupported range expression: {expr!r}")


def _start_of(bound: Bound, default: int) -> int:
    if isinstance(bound, Included):
        return _as_index(bound.value)
    if isinstance(bound, Excluded):
        value = _as_index(bound.value)
        if value >= INDEX_MAX:
            raise BoundOverflowError(f"exclusive start {value} has no successor")
        return value + 1
    return default


def _end_of(bound: Bound, default: int) -> int:
    if isinstance(bound, Excluded):
        return _as_index(bound.value)
    if isinstance(bound, Included):
        value = _as_index(bound.value)
        if value >= INDEX_MAX:
            raise BoundOverflowError(f"inclusive end {value} has no successor")
        return value + 1
    return default


def normalize_range(expr: Any, start: int, end: int) -> Tuple[int, int]:
    """Return canonical ``(lo, hi)`` with ``start <= lo <= hi <= end``"""

    rng = to_range(expr)
    lo = _start_of(rng.start, start)
    hi = _end_of(rng.end, end)
    if not start <= lo <= hi <= end:
        raise RangeError(f"range {expr!r} -> [{lo}, {hi}) is not within [{start}, {end})")
    return lo, hi


def check_index(index: Any, start: int, end: int) -> int:
    index = _as_index(index)
    if not start <= index < end:
        raise RangeError(f"index {index} is out of range [{start}, {end})")
    return index


def check_origin(index: Any, start: int, end: int) -> int:
    """Validate a boundary search origin, which may equal ``end``"""

    index = _as_index(index)
    if not start <= index <= end:
        raise RangeError(f"origin {index} is out of range [{start}, {end}]")
    return index


def normalize_domain(domain: Any) -> Optional[Tuple[int, int]]:
    """Return ``(lo, hi)`` of a tree domain, or None if it is empty"""

    if isinstance(domain, Integral) and not isinstance(domain, bool):
        size = int(domain)
        if size < 0 or size > INDEX_LIMIT:
            raise RangeError(f"domain size {size} is out of range [0, {INDEX_LIMIT}]")
        return (0, size) if size > 0 else None
    lo, hi = normalize_range(domain, 0, INDEX_LIMIT)
    return (lo, hi) if lo < hi else None
