"""
Input validation utilities for ndstats.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.exceptions import (
    ValidationError,
    DimensionError,
    EmptyInputError,
    InvalidQuantileError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number) and result.dtype != np.bool_:
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[Any], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[Any], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_nonempty(array: NDArray[Any], name: str) -> None:
    """
    Verify array has at least one element.

    Raises:
        EmptyInputError: If array.size == 0
    """
    if array.size == 0:
        raise EmptyInputError(
            f"{name}: requires at least 1 element, got shape {array.shape}",
            name=name,
        )


def check_axis(axis: int, ndim: int, name: str = "axis") -> int:
    """
    Validate an axis index and normalise negative values.

    Returns:
        Axis in [0, ndim)

    Raises:
        DimensionError: If axis is out of bounds for ndim
    """
    if not isinstance(axis, (int, np.integer)) or isinstance(axis, bool):
        raise ValidationError(f"{name}: expected an integer, got {axis!r}")
    axis = int(axis)
    if not -ndim <= axis < ndim:
        raise DimensionError(
            f"{name}: {axis} is out of bounds for array of dimension {ndim}"
        )
    return axis % ndim


def check_consistent_shape(
    *arrays: NDArray[Any],
    names: tuple[str, ...],
) -> None:
    """
    Verify all arrays have the same shape.

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have different shapes
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    shapes = [arr.shape for arr in arrays]
    if len(set(shapes)) > 1:
        details = ", ".join(f"{name}={shape}" for name, shape in zip(names, shapes))
        raise DimensionError(f"Inconsistent shapes: {details}")


def check_quantile(q: Any, name: str = "q") -> float:
    """
    Validate a single quantile.

    Returns:
        q as a Python float

    Raises:
        InvalidQuantileError: If q is NaN, not a real number, or outside [0, 1]
    """
    try:
        value = float(q)
    except (TypeError, ValueError) as e:
        raise InvalidQuantileError(f"{name}: expected a real number, got {q!r}", q=q) from e

    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise InvalidQuantileError(f"{name}: must be in [0, 1], got {value}", q=value)

    return value


def check_quantiles(qs: Sequence[Any] | NDArray[Any], name: str = "q") -> list[float]:
    """
    Validate a sequence of quantiles. Order is preserved.

    Raises:
        InvalidQuantileError: If any quantile is invalid
        EmptyInputError: If no quantiles were given
    """
    values = np.asarray(qs, dtype=object).ravel().tolist()
    if len(values) == 0:
        raise EmptyInputError(f"{name}: at least one quantile is required", name=name)
    return [check_quantile(q, name) for q in values]
