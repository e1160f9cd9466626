# -*- coding: utf-8 -*-
import math
import operator
from typing import Any, Optional, Tuple

from segkit.algebra.monoid import Monoid, MonoidAction

AffineMap = Tuple[Any, Any]  # x -> a * x + b

# region query monoids


class Add(Monoid):
    is_commutative = True

    def identity(self) -> Any:
        return 0

    def combine(self, lhs: Any, rhs: Any) -> Any:
        return lhs + rhs


class Mul(Monoid):
    is_commutative = True

    def identity(self) -> Any:
        return 1

    def combine(self, lhs: Any, rhs: Any) -> Any:
        return lhs * rhs


class Min(Monoid):
    is_commutative = True

    def identity(self) -> Any:
        return math.inf

    def combine(self, lhs: Any, rhs: Any) -> Any:
        return lhs if lhs <= rhs else rhs


class Max(Monoid):
    is_commutative = True

    def identity(self) -> Any:
        return -math.inf

    def combine(self, lhs: Any, rhs: Any) -> Any:
        return lhs if lhs >= rhs else rhs


class BitAnd(Monoid):
    """Bitwise and over fixed-width unsigned integers"""

    is_commutative = True

    def __init__(self, bits: int = 64):
        self.bits = bits

    def identity(self) -> int:
        return (1 << self.bits) - 1

    def combine(self, lhs: int, rhs: int) -> int:
        return operator.and_(lhs, rhs)

    def __repr__(self) -> str:
        return f"BitAnd(bits={self.bits})"


class BitOr(Monoid):
    is_commutative = True

    def identity(self) -> int:
        return 0

    def combine(self, lhs: int, rhs: int) -> int:
        return operator.or_(lhs, rhs)


class BitXor(Monoid):
    is_commutative = True

    def identity(self) -> int:
        return 0

    def combine(self, lhs: int, rhs: int) -> int:
        return operator.xor(lhs, rhs)


class Gcd(Monoid):
    is_commutative = True

    def identity(self) -> int:
        return 0

    def combine(self, lhs: int, rhs: int) -> int:
        return math.gcd(lhs, rhs)


class Lcm(Monoid):
    is_commutative = True

    def identity(self) -> int:
        return 1

    def combine(self, lhs: int, rhs: int) -> int:
        if lhs == 0 or rhs == 0:
            return 0
        return abs(lhs * rhs) // math.gcd(lhs, rhs)


class Composite(Monoid):
    """Affine maps folded in range order: combine(f, g) applies f first, then g"""

    def identity(self) -> AffineMap:
        return (1, 0)

    def combine(self, lhs: AffineMap, rhs: AffineMap) -> AffineMap:
        return (rhs[0] * lhs[0], rhs[0] * lhs[1] + rhs[1])


# endregion

# region update monoids


class Affine(Monoid):
    """Affine maps under composition: combine(f, g) == f after g"""

    def identity(self) -> AffineMap:
        return (1, 0)

    def combine(self, lhs: AffineMap, rhs: AffineMap) -> AffineMap:
        return (lhs[0] * rhs[0], lhs[0] * rhs[1] + lhs[1])


class Assign(Monoid):
    """Last write wins, ``None`` means nothing assigned"""

    def identity(self) -> Optional[Any]:
        return None

    def combine(self, lhs: Optional[Any], rhs: Optional[Any]) -> Optional[Any]:
        return rhs if lhs is None else lhs


# endregion

# region actions


def repeat(monoid: Monoid, value: Any, times: int) -> Any:
    """Return value combined with itself ``times`` times, by doubling"""

    assert times >= 0
    result = monoid.identity()
    while times:
        if times & 1:
            result = monoid.combine(result, value)
        times >>= 1
        if times:
            value = monoid.combine(value, value)
    return result


class AddQueryAddUpdate(MonoidAction):
    """Range add on range sums"""

    def __init__(self):
        super().__init__(Add(), Add())

    def act(self, update: Any, value: Any, size: int) -> Any:
        return value + update * size


class AddQueryMulUpdate(MonoidAction):
    uses_size = False

    def __init__(self):
        super().__init__(Add(), Mul())

    def act(self, update: Any, value: Any, size: int) -> Any:
        return value * update


class AddQueryAffineUpdate(MonoidAction):
    """Range affine map on range sums"""

    def __init__(self):
        super().__init__(Add(), Affine())

    def act(self, update: AffineMap, value: Any, size: int) -> Any:
        return update[0] * value + update[1] * size


class MinQueryAddUpdate(MonoidAction):
    uses_size = False

    def __init__(self):
        super().__init__(Min(), Add())

    def act(self, update: Any, value: Any, size: int) -> Any:
        return value + update


class MaxQueryAddUpdate(MonoidAction):
    uses_size = False

    def __init__(self):
        super().__init__(Max(), Add())

    def act(self, update: Any, value: Any, size: int) -> Any:
        return value + update


class AssignUpdate(MonoidAction):
    """Range assign on any query monoid; O(log size) per application"""

    def __init__(self, query: Monoid):
        super().__init__(query, Assign())

    def act(self, update: Optional[Any], value: Any, size: int) -> Any:
        if update is None:
            return value
        return repeat(self.query, update, size)


# endregion
