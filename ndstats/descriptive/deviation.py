"""
Deviation measures between two arrays of the same shape.

Counts and distances are over all elements. Mean-based measures raise
EmptyInputError on empty input; the plain sums of an empty pair are 0.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.exceptions import DimensionMismatchError, EmptyInputError, ValidationError
from ndstats.core.validation import check_array


def _pair(a: ArrayLike, b: ArrayLike) -> tuple[NDArray[Any], NDArray[Any]]:
    x = check_array(a, "a")
    y = check_array(b, "b")
    if x.shape != y.shape:
        raise DimensionMismatchError(
            f"shapes differ: a={x.shape}, b={y.shape}", expected=x.shape, actual=y.shape,
        )
    return x, y


def _nonempty_pair(a: ArrayLike, b: ArrayLike) -> tuple[NDArray[Any], NDArray[Any]]:
    x, y = _pair(a, b)
    if x.size == 0:
        raise EmptyInputError("a, b: require at least 1 element", name="a")
    return x, y


def count_eq(a: ArrayLike, b: ArrayLike) -> int:
    """Number of positions where a == b."""
    x, y = _pair(a, b)
    return int(np.count_nonzero(x == y))


def count_neq(a: ArrayLike, b: ArrayLike) -> int:
    """Number of positions where a != b."""
    x, y = _pair(a, b)
    return int(np.count_nonzero(x != y))


def sq_l2_dist(a: ArrayLike, b: ArrayLike) -> float:
    """Squared Euclidean distance."""
    x, y = _pair(a, b)
    return float(np.sum((x - y) ** 2))


def l2_dist(a: ArrayLike, b: ArrayLike) -> float:
    """Euclidean distance."""
    return float(np.sqrt(sq_l2_dist(a, b)))


def l1_dist(a: ArrayLike, b: ArrayLike) -> float:
    """Manhattan distance, sum(|a - b|)."""
    x, y = _pair(a, b)
    return float(np.sum(np.abs(x - y)))


def linf_dist(a: ArrayLike, b: ArrayLike) -> float:
    """Chebyshev distance, max(|a - b|)."""
    x, y = _nonempty_pair(a, b)
    return float(np.max(np.abs(x - y)))


def mean_abs_err(a: ArrayLike, b: ArrayLike) -> float:
    """Mean absolute error."""
    x, y = _nonempty_pair(a, b)
    return float(np.mean(np.abs(x - y)))


def mean_sq_err(a: ArrayLike, b: ArrayLike) -> float:
    """Mean squared error."""
    x, y = _nonempty_pair(a, b)
    return float(np.mean((x - y) ** 2))


def root_mean_sq_err(a: ArrayLike, b: ArrayLike) -> float:
    """Root mean squared error."""
    return float(np.sqrt(mean_sq_err(a, b)))


def peak_signal_to_noise_ratio(a: ArrayLike, b: ArrayLike, max_value: float) -> float:
    """
    PSNR in decibels, 10 * log10(max_value^2 / mse).

    Identical arrays give +inf.
    """
    if not max_value > 0:
        raise ValidationError(f"max_value must be positive, got {max_value}")
    mse = mean_sq_err(a, b)
    with np.errstate(divide='ignore'):
        return float(10.0 * np.log10(max_value ** 2 / np.float64(mse)))
