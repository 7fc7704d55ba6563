"""
Extreme values and their positions.

min/max/argmin/argmax refuse arrays containing NaN, because NaN has no
place in the natural order and the result would depend on where the NaN
happens to sit. The *_skipnan variants ignore NaN instead.

Positions are returned as index tuples into the original shape.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.exceptions import EmptyInputError, UndefinedOrderError


def _checked(a: ArrayLike, name: str = "a") -> NDArray[Any]:
    arr = np.asarray(a)
    if arr.size == 0:
        raise EmptyInputError(f"{name}: requires at least 1 element, got shape {arr.shape}", name=name)
    return arr


def _nan_mask(arr: NDArray[Any]) -> NDArray[np.bool_] | None:
    if np.issubdtype(arr.dtype, np.inexact):
        return np.isnan(arr)
    return None


def _reject_nan(arr: NDArray[Any]) -> None:
    mask = _nan_mask(arr)
    if mask is not None and mask.any():
        first = tuple(int(i) for i in np.unravel_index(int(np.argmax(mask)), arr.shape))
        raise UndefinedOrderError(
            f"a: contains NaN (first at index {first}); use the *_skipnan variant",
            value=arr[first],
        )


def _position(flat_index: int, shape: tuple[int, ...]) -> tuple[int, ...]:
    return tuple(int(i) for i in np.unravel_index(flat_index, shape))


def argmin(a: ArrayLike) -> tuple[int, ...]:
    """
    Index of the first minimum.

    Raises:
        EmptyInputError: If a is empty
        UndefinedOrderError: If a contains NaN
    """
    arr = _checked(a)
    _reject_nan(arr)
    return _position(int(np.argmin(arr)), arr.shape)


def argmax(a: ArrayLike) -> tuple[int, ...]:
    """
    Index of the first maximum.

    Raises:
        EmptyInputError: If a is empty
        UndefinedOrderError: If a contains NaN
    """
    arr = _checked(a)
    _reject_nan(arr)
    return _position(int(np.argmax(arr)), arr.shape)


def min(a: ArrayLike) -> Any:
    """Minimum element. Same errors as argmin."""
    arr = _checked(a)
    return arr[argmin(arr)]


def max(a: ArrayLike) -> Any:
    """Maximum element. Same errors as argmax."""
    arr = _checked(a)
    return arr[argmax(arr)]


def argmin_skipnan(a: ArrayLike) -> tuple[int, ...] | None:
    """Index of the first minimum ignoring NaN; None if every element is NaN."""
    arr = _checked(a)
    mask = _nan_mask(arr)
    if mask is None:
        return _position(int(np.argmin(arr)), arr.shape)
    if mask.all():
        return None
    return _position(int(np.nanargmin(arr)), arr.shape)


def argmax_skipnan(a: ArrayLike) -> tuple[int, ...] | None:
    """Index of the first maximum ignoring NaN; None if every element is NaN."""
    arr = _checked(a)
    mask = _nan_mask(arr)
    if mask is None:
        return _position(int(np.argmax(arr)), arr.shape)
    if mask.all():
        return None
    return _position(int(np.nanargmax(arr)), arr.shape)


def min_skipnan(a: ArrayLike) -> Any:
    """Minimum ignoring NaN; NaN if every element is NaN."""
    arr = _checked(a)
    index = argmin_skipnan(arr)
    return arr.dtype.type(np.nan) if index is None else arr[index]


def max_skipnan(a: ArrayLike) -> Any:
    """Maximum ignoring NaN; NaN if every element is NaN."""
    arr = _checked(a)
    index = argmax_skipnan(arr)
    return arr.dtype.type(np.nan) if index is None else arr[index]
