# -*- coding: utf-8 -*-
import logging
from typing import Any, Optional

from segkit.algebra.monoid import Monoid, MonoidAction
from segkit.tree.assign import AssignSegmentTree
from segkit.tree.bounds import normalize_domain
from segkit.tree.dual import DualSegmentTree
from segkit.tree.dynamic import DynamicSegmentTree
from segkit.tree.dynamic_lazy import DynamicLazySegmentTree
from segkit.tree.lazy import LazySegmentTree
from segkit.tree.segtree import SegmentTree

logger = logging.getLogger(__name__)

DEFAULT_CFG = dict(
    domain=None,
    monoid=None,
    action=None,
    assign=False,
    dual=False,
    sparse=False,
    capacity=None,
)


def create_tree(
    domain: Any,
    monoid: Optional[Monoid] = None,
    action: Optional[MonoidAction] = None,
    assign: bool = False,
    dual: bool = False,
    sparse: bool = False,
    capacity: Optional[int] = None,
) -> Any:
    """Pick the engine matching the requested operations.

    ``monoid`` alone gives point update / range query, ``action`` adds range
    updates (``dual`` drops range queries), ``assign`` uses range assignment
    over ``monoid``. ``sparse`` trees accept any domain inside the 64-bit index
    space and are None when it is empty; ``capacity`` is their expected number
    of updates.
    """

    if (monoid is None) == (action is None):
        raise ValueError("exactly one of monoid and action is required")
    if assign and monoid is None:
        raise ValueError("assign trees take a monoid, not an action")
    if dual and (action is None or sparse):
        raise ValueError("dual trees are dense and take an action")
    if capacity is not None and not sparse:
        raise ValueError("capacity only applies to sparse trees")
    if assign and sparse:
        raise ValueError("there is no sparse assign tree, use an AssignUpdate action")

    if sparse:
        cls = DynamicSegmentTree if action is None else DynamicLazySegmentTree
        algebra = monoid if action is None else action
        logger.debug("create_tree: %s over %r", cls.__name__, domain)
        if capacity is None:
            return cls.new(domain, algebra)
        return cls.with_capacity(domain, algebra, capacity)

    bounds = normalize_domain(domain)
    size = 0 if bounds is None else bounds[1] - bounds[0]
    if bounds is not None and bounds[0] != 0:
        raise ValueError(f"dense trees start at index 0, got domain {domain!r}")

    if assign:
        cls, algebra = AssignSegmentTree, monoid
    elif action is None:
        cls, algebra = SegmentTree, monoid
    elif dual:
        cls, algebra = DualSegmentTree, action
    else:
        cls, algebra = LazySegmentTree, action
    logger.debug("create_tree: %s of size %d", cls.__name__, size)
    return cls.new(size, algebra)


def process_cfg(cfg: dict) -> Any:
    unknown = set(cfg) - set(DEFAULT_CFG)
    if unknown:
        raise ValueError(f"unknown tree config keys: {sorted(unknown)}")

    cfg = {**DEFAULT_CFG, **cfg}
    if cfg["domain"] is None:
        raise ValueError("tree config requires a domain")
    return create_tree(**cfg)
