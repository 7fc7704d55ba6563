"""
Total ordering over values that may include NaN.

IEEE 754 comparison is only a partial order: every comparison involving
NaN is False, which silently breaks comparison-based algorithms
(quickselect may return the wrong order statistic). This module lifts
such values into a strict total order.

Two comparators are provided and passed explicitly to the selection
and quantile engines:

    total_less   NaN is greater than every other value and all NaNs are
                 equal to each other. Never raises. This is the default,
                 and agrees with numpy's sort order for floats.
    strict_less  Natural order. Raises UndefinedOrderError as soon as a
                 NaN takes part in a comparison.

OrderedValue wraps a single value so that Python's own sorting and
comparison operators follow total_less.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

from ndstats.core.exceptions import UndefinedOrderError

Less = Callable[[Any, Any], bool]

_CANONICAL_NAN_HASH = hash('nan')


def is_nan(x: Any) -> bool:
    """True if x is not equal to itself (the defining property of NaN)."""
    return bool(x != x)


def total_less(a: Any, b: Any) -> bool:
    """
    Strict total order with NaN placed after every other value.

    Returns:
        True if a sorts strictly before b
    """
    if a != a:
        return False
    if b != b:
        return True
    return bool(a < b)


def strict_less(a: Any, b: Any) -> bool:
    """
    Natural order that refuses to compare NaN.

    Raises:
        UndefinedOrderError: If a or b is NaN
    """
    if a != a:
        raise UndefinedOrderError(f"cannot order NaN value {a!r}", value=a)
    if b != b:
        raise UndefinedOrderError(f"cannot order NaN value {b!r}", value=b)
    return bool(a < b)


@functools.total_ordering
class OrderedValue:
    """
    Value wrapper whose comparisons follow total_less.

    Wrapping never fails. All NaNs compare equal and share one hash, so
    wrapped values can be sorted, deduplicated and used as dict keys.

    Usage:
        sorted([3.0, nan, 1.0], key=OrderedValue)   # [1.0, 3.0, nan]
        OrderedValue(x).value is x                  # unwrap
    """

    __slots__ = ('_value',)

    def __init__(self, value: Any):
        self._value = value

    @property
    def value(self) -> Any:
        """The wrapped value."""
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedValue):
            return NotImplemented
        a, b = self._value, other._value
        return not total_less(a, b) and not total_less(b, a)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, OrderedValue):
            return NotImplemented
        return total_less(self._value, other._value)

    def __hash__(self) -> int:
        if is_nan(self._value):
            return _CANONICAL_NAN_HASH
        return hash(self._value)

    def __repr__(self) -> str:
        return f"OrderedValue({self._value!r})"
