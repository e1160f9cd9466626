# -*- coding: utf-8 -*-


class SegmentTreeError(Exception):
    pass


class RangeError(SegmentTreeError, IndexError):
    """Index or range outside the tree's domain"""


class BoundOverflowError(RangeError, OverflowError):
    """Inclusive end or exclusive start already at the largest index"""


class EmptyDomainError(SegmentTreeError, ValueError):
    pass


class PredicateError(SegmentTreeError, ValueError):
    """Boundary search predicate rejects the identity element"""
