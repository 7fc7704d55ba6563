"""
Interpolation policies for quantiles falling between two order statistics.

With the 0-indexed rank convention r = q * (n - 1), a quantile sits
between the order statistics at lo = floor(r) and hi = ceil(r), with
fraction = r - lo. A policy combines (lower, higher, fraction) into one
value. The table below matches numpy.quantile's `method=` names.

    lower     lower
    higher    higher
    nearest   lower if fraction < 0.5 else higher  (ties round up)
    midpoint  lower + (higher - lower) / 2
    linear    lower + (higher - lower) * fraction

Every policy returns exactly `lower` when fraction == 0, which is what
makes q = 0 and q = 1 return the minimum and maximum. midpoint and linear
also return `lower` when both order statistics are equal, so a run of
equal infinities interpolates to that infinity rather than inf - inf.
Booleans are combined as 0 and 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal

import numpy as np

from ndstats.core.exceptions import ValidationError

InterpolateMethod = Literal['lower', 'higher', 'nearest', 'midpoint', 'linear']


@dataclass(frozen=True)
class Interpolation:
    """
    A named interpolation policy.

    Attributes:
        name: Policy name as accepted by the quantile solvers
        combine: (lower, higher, fraction) -> value
        needs_lower: fraction -> whether the lower order statistic is read
        needs_higher: fraction -> whether the higher order statistic is read
    """
    name: str
    combine: Callable[[Any, Any, float], Any]
    needs_lower: Callable[[float], bool]
    needs_higher: Callable[[float], bool]

    def __call__(self, lower: Any, higher: Any, fraction: float) -> Any:
        return self.combine(lower, higher, fraction)


def _lower(lower, higher, fraction):
    return lower


def _higher(lower, higher, fraction):
    return higher


def _nearest(lower, higher, fraction):
    return lower if fraction < 0.5 else higher


def _arithmetic(value):
    # numpy booleans do not subtract
    if isinstance(value, (bool, np.bool_)):
        return int(value)
    return value


def _midpoint(lower, higher, fraction):
    lower, higher = _arithmetic(lower), _arithmetic(higher)
    if fraction == 0 or lower == higher:
        return lower
    return lower + (higher - lower) / 2


def _linear(lower, higher, fraction):
    lower, higher = _arithmetic(lower), _arithmetic(higher)
    if fraction == 0 or lower == higher:
        return lower
    return lower + (higher - lower) * fraction


def _always(fraction: float) -> bool:
    return True


def _never(fraction: float) -> bool:
    return False


# needs_lower / needs_higher are only consulted for fraction > 0; at an
# integral rank both order statistics are the same element.
LOWER = Interpolation('lower', _lower, _always, _never)
HIGHER = Interpolation('higher', _higher, _never, _always)
NEAREST = Interpolation('nearest', _nearest, lambda f: f < 0.5, lambda f: f >= 0.5)
MIDPOINT = Interpolation('midpoint', _midpoint, _always, _always)
LINEAR = Interpolation('linear', _linear, _always, _always)

INTERPOLATIONS: dict[str, Interpolation] = {
    policy.name: policy for policy in (LOWER, HIGHER, NEAREST, MIDPOINT, LINEAR)
}


def get_interpolation(method: InterpolateMethod | Interpolation) -> Interpolation:
    """
    Resolve an interpolation policy by name.

    Raises:
        ValidationError: If the name is unknown
    """
    if isinstance(method, Interpolation):
        return method
    try:
        return INTERPOLATIONS[method]
    except (KeyError, TypeError):
        raise ValidationError(
            f"Unknown interpolation method: {method!r}. "
            f"Must be one of {sorted(INTERPOLATIONS)}."
        ) from None
