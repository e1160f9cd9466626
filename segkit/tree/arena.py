# -*- coding: utf-8 -*-
import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

ABSENT = 0  # sentinel slot standing for an unmaterialized, all-identity subtree
ROOT = 1


class NodeArena:
    """Node storage for sparse trees, referenced by index and never freed one by one.

    Slot 0 is a read-only sentinel: its aggregate is the identity, it has no
    pending update and both of its children are the sentinel again.
    """

    def __init__(self, identity: Any, capacity: int = 0, lazy: bool = False):
        self._identity = identity
        self._has_lazy = lazy
        self._reserved = max(capacity, 2) + 2
        self.reset()

    def reset(self) -> None:
        """Drop every node but the root, keeping the reserved link storage"""

        self.value: List[Any] = [self._identity, self._identity]
        self.lazy: Optional[List[Any]] = [None, None] if self._has_lazy else None
        self.left: List[int] = [ABSENT] * self._reserved
        self.right: List[int] = [ABSENT] * self._reserved

    def __len__(self) -> int:
        """Number of materialized nodes, root included"""
        return len(self.value) - 1

    @property
    def capacity(self) -> int:
        return len(self.left)

    def alloc(self, value: Any) -> int:
        index = len(self.value)
        if index >= len(self.left):
            grow = len(self.left)
            logger.debug("growing node arena: %d -> %d", grow, 2 * grow)
            self.left.extend([ABSENT] * grow)
            self.right.extend([ABSENT] * grow)
        self.value.append(value)
        if self.lazy is not None:
            self.lazy.append(None)
        return index

    def left_of(self, node: int) -> int:
        return self.left[node]

    def right_of(self, node: int) -> int:
        return self.right[node]

    def child(self, node: int, right: bool) -> int:
        """Return a child of ``node``, materializing it on first access"""

        assert node != ABSENT
        links = self.right if right else self.left
        child = links[node]
        if child == ABSENT:
            child = self.alloc(self._identity)
            links[node] = child
        return child
