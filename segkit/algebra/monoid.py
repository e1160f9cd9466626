# -*- coding: utf-8 -*-
from abc import ABC, abstractmethod
from typing import Any, Callable


class Monoid(ABC):
    """Associative binary operation with a two-sided identity.

    Implementations must satisfy, for all a, b, c:

        combine(a, combine(b, c)) == combine(combine(a, b), c)
        combine(identity(), a) == combine(a, identity()) == a

    The laws are the caller's proof obligation, trees never check them.
    """

    # Set True only if combine(a, b) == combine(b, a) for all a, b.
    is_commutative: bool = False

    @abstractmethod
    def identity(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def combine(self, lhs: Any, rhs: Any) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class FnMonoid(Monoid):
    """Monoid built from a plain binary callable"""

    def __init__(
        self,
        operation: Callable[[Any, Any], Any],
        identity: Any,
        commutative: bool = False,
    ):
        self._operation = operation
        self._identity = identity
        self.is_commutative = commutative

    def identity(self) -> Any:
        return self._identity

    def combine(self, lhs: Any, rhs: Any) -> Any:
        return self._operation(lhs, rhs)

    def __repr__(self) -> str:
        return "FnMonoid(operation={}, identity={!r}, commutative={})".format(
            getattr(self._operation, "__name__", self._operation),
            self._identity,
            self.is_commutative,
        )


class MonoidAction(ABC):
    """Action of an update monoid on a query monoid.

    ``update.combine(u1, u2)`` means "u1 applied after u2", and ``act`` must satisfy:

        act(update.combine(u1, u2), q) == act(u1, act(u2, q))
        act(u, query.combine(q1, q2)) == query.combine(act(u, q1), act(u, q2))

    ``size`` is the number of leaves aggregated into ``value``. Actions whose
    result does not depend on it set ``uses_size = False``.
    """

    uses_size: bool = True

    def __init__(self, query: Monoid, update: Monoid):
        self.query = query
        self.update = update

    @abstractmethod
    def act(self, update: Any, value: Any, size: int) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(query={self.query!r}, update={self.update!r})"


class FnMonoidAction(MonoidAction):
    def __init__(
        self,
        query: Monoid,
        update: Monoid,
        act: Callable[[Any, Any, int], Any],
        uses_size: bool = True,
    ):
        super().__init__(query, update)
        self._act = act
        self.uses_size = uses_size

    def act(self, update: Any, value: Any, size: int) -> Any:
        return self._act(update, value, size)
