"""
Means and central moments along an axis.

All functions take `axis=None` (reduce over every element) or an
integer axis, and raise EmptyInputError when the reduction would be
over zero elements. NaN propagates.

Skewness and kurtosis default to the population (moment) estimators

    g1 = m3 / m2^(3/2)          g2 = m4 / m2^2 - 3

where mk = mean((x - mean(x))^k). With adjusted=True they return the
bias-adjusted sample estimators (e1071 type 2):

    G1 = g1 * sqrt(n (n - 1)) / (n - 2)                  (n >= 3)
    G2 = ((n - 1) / ((n - 2)(n - 3))) ((n + 1) g2 + 6)   (n >= 4)

Undefined values (zero variance, too few observations) are NaN.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.exceptions import (
    DimensionMismatchError,
    EmptyInputError,
    NumericalError,
    ValidationError,
)
from ndstats.core.validation import check_array, check_axis


def _prepare(a: ArrayLike, axis: int | None, name: str = "a") -> tuple[NDArray[np.floating[Any]], int | None, int]:
    """Validated float array, normalised axis, and number of reduced elements."""
    arr = check_array(a, name)
    if axis is None:
        n = arr.size
    else:
        if arr.ndim == 0:
            raise ValidationError(f"{name}: cannot reduce a scalar along axis {axis}")
        axis = check_axis(axis, arr.ndim)
        n = arr.shape[axis]
    if n == 0:
        raise EmptyInputError(f"{name}: cannot reduce over 0 elements (shape {arr.shape})", name=name)
    return arr, axis, n


def mean(a: ArrayLike, *, axis: int | None = None) -> Any:
    """Arithmetic mean."""
    arr, axis, _ = _prepare(a, axis)
    return np.mean(arr, axis=axis)


def _check_weights(arr: NDArray[Any], weights: ArrayLike, axis: int | None) -> NDArray[np.floating[Any]]:
    w = check_array(weights, "weights")
    if axis is None:
        if w.shape != arr.shape:
            raise DimensionMismatchError(
                f"weights shape {w.shape} does not match data shape {arr.shape}",
                expected=arr.shape,
                actual=w.shape,
            )
        return w
    if w.ndim != 1 or w.shape[0] != arr.shape[axis]:
        raise DimensionMismatchError(
            f"weights must be 1D of length {arr.shape[axis]} for axis {axis}, got shape {w.shape}",
            expected=(arr.shape[axis],),
            actual=w.shape,
        )
    shape = [1] * arr.ndim
    shape[axis] = -1
    return w.reshape(shape)


def weighted_sum(a: ArrayLike, weights: ArrayLike, *, axis: int | None = None) -> Any:
    """
    Sum of a * weights.

    With axis=None weights must have the shape of `a`; with an axis they
    must be 1-D with one weight per position along that axis.
    """
    arr, axis, _ = _prepare(a, axis)
    w = _check_weights(arr, weights, axis)
    return np.sum(arr * w, axis=axis)


def weighted_mean(a: ArrayLike, weights: ArrayLike, *, axis: int | None = None) -> Any:
    """
    Weighted arithmetic mean, sum(a * w) / sum(w).

    Raises:
        NumericalError: If the weights sum to zero
    """
    arr, axis, _ = _prepare(a, axis)
    w = _check_weights(arr, weights, axis)
    total = np.sum(np.broadcast_to(w, arr.shape), axis=axis)
    if np.any(total == 0):
        raise NumericalError("weights sum to zero")
    return np.sum(arr * w, axis=axis) / total


def harmonic_mean(a: ArrayLike, *, axis: int | None = None) -> Any:
    """n / sum(1 / a). Zero values give 0; data should be positive."""
    arr, axis, n = _prepare(a, axis)
    with np.errstate(divide='ignore'):
        return n / np.sum(1.0 / arr, axis=axis)


def geometric_mean(a: ArrayLike, *, axis: int | None = None) -> Any:
    """exp(mean(log a)). Data should be positive; negative values give NaN."""
    arr, axis, _ = _prepare(a, axis)
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.exp(np.mean(np.log(arr), axis=axis))


def central_moment(a: ArrayLike, order: int, *, axis: int | None = None) -> Any:
    """
    k-th central moment, mean((a - mean(a))^k).

    Order 0 is 1 and order 1 is 0 by definition.
    """
    if order < 0:
        raise ValidationError(f"order must be non-negative, got {order}")
    arr, axis, _ = _prepare(a, axis)
    deviations = arr - np.mean(arr, axis=axis, keepdims=True)
    if order == 0:
        return np.ones_like(np.mean(arr, axis=axis))
    if order == 1:
        return np.zeros_like(np.mean(arr, axis=axis))
    return np.mean(deviations ** order, axis=axis)


def central_moments(a: ArrayLike, max_order: int, *, axis: int | None = None) -> NDArray[np.floating[Any]]:
    """
    Central moments of orders 0..max_order, stacked along a new first axis.

    Deviations from the mean are computed once and reused.
    """
    if max_order < 0:
        raise ValidationError(f"max_order must be non-negative, got {max_order}")
    arr, axis, _ = _prepare(a, axis)
    deviations = arr - np.mean(arr, axis=axis, keepdims=True)
    moments = []
    power = np.ones_like(deviations)
    for k in range(max_order + 1):
        if k == 1:
            moments.append(np.zeros_like(moments[0]))
        else:
            moments.append(np.mean(power, axis=axis))
        power = power * deviations
    return np.stack(moments)


def skewness(a: ArrayLike, *, axis: int | None = None, adjusted: bool = False) -> Any:
    """Skewness; population by default, bias-adjusted with adjusted=True."""
    arr, axis, n = _prepare(a, axis)
    m = central_moments(arr, 3, axis=axis)
    with np.errstate(divide='ignore', invalid='ignore'):
        g1 = np.where(m[2] == 0, np.nan, m[3] / m[2] ** 1.5)
        if not adjusted:
            return g1[()]
        if n < 3:
            return np.full_like(g1, np.nan)[()]
        return (g1 * np.sqrt(n * (n - 1.0)) / (n - 2.0))[()]


def kurtosis(
    a: ArrayLike,
    *,
    axis: int | None = None,
    adjusted: bool = False,
    excess: bool = True,
) -> Any:
    """
    Kurtosis; population by default, bias-adjusted with adjusted=True.

    excess=True subtracts 3 so that the normal distribution scores 0.
    The adjusted estimator is always reported as excess kurtosis + 3 when
    excess=False.
    """
    arr, axis, n = _prepare(a, axis)
    m = central_moments(arr, 4, axis=axis)
    with np.errstate(divide='ignore', invalid='ignore'):
        g2 = np.where(m[2] == 0, np.nan, m[4] / m[2] ** 2 - 3.0)
        if adjusted:
            if n < 4:
                g2 = np.full_like(g2, np.nan)
            else:
                g2 = ((n - 1.0) / ((n - 2.0) * (n - 3.0))) * ((n + 1.0) * g2 + 6.0)
    result = g2 if excess else g2 + 3.0
    return result[()]
