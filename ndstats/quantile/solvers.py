"""
Quantile engine.

Quantiles are read from order statistics obtained by in-place selection
(ndstats.order.select_many) rather than by sorting. All quantiles
requested for one lane share a single selection pass.

Rank convention (0-indexed, the same as numpy's default and R type 7):

    r = q * (n - 1),  lo = floor(r),  hi = ceil(r),  fraction = r - lo

The order statistics at lo and hi are combined by the interpolation
policy. q = 0 always yields the minimum and q = 1 the maximum.

Public API:
    quantile(data, q)                - One quantile of 1-D data
    quantiles(data, qs)              - Several quantiles of 1-D data
    median(data)                     - quantile(data, 0.5)
    quantile_axis(a, q, axis=...)    - Quantiles along an axis of an ndarray
    quantile_axis_skipnan(a, q, ...) - Same, ignoring NaN
    median_axis(a, axis=...)         - Median along an axis
"""

from __future__ import annotations

import math
from typing import Any, MutableSequence, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.exceptions import DimensionError, EmptyInputError, ValidationError
from ndstats.core.validation import (
    check_1d,
    check_axis,
    check_quantile,
    check_quantiles,
)
from ndstats.order.selection import select_many
from ndstats.order.total_order import Less, total_less
from ndstats.quantile.interpolate import (
    InterpolateMethod,
    Interpolation,
    LINEAR,
    MIDPOINT,
    get_interpolation,
)


def _rank_position(q: float, n: int) -> tuple[int, int, float]:
    """(lo, hi, fraction) of quantile q in a sequence of length n."""
    r = q * (n - 1)
    lo = math.floor(r)
    hi = math.ceil(r)
    return lo, hi, r - lo


def _lane_quantiles(
    buffer: MutableSequence[Any],
    qs: Sequence[float],
    policy: Interpolation,
    less: Less,
) -> list[Any]:
    """Quantiles of one lane, with a single select_many pass over buffer."""
    n = len(buffer)
    if n == 0:
        raise EmptyInputError("cannot compute a quantile of an empty sequence", name="data")

    positions = [_rank_position(q, n) for q in qs]
    ranks: set[int] = set()
    for lo, hi, fraction in positions:
        if fraction == 0:
            ranks.add(lo)
            continue
        if policy.needs_lower(fraction):
            ranks.add(lo)
        if policy.needs_higher(fraction):
            ranks.add(hi)

    ordered = sorted(ranks)
    selected = dict(zip(ordered, select_many(buffer, ordered, less=less)))

    values = []
    for lo, hi, fraction in positions:
        if fraction == 0:
            value = selected[lo]
            values.append(policy(value, value, 0.0))
        else:
            values.append(policy(selected.get(lo), selected.get(hi), fraction))
    return values


def _as_buffer(data: Any, overwrite_input: bool) -> MutableSequence[Any]:
    """1-D working buffer: the caller's own sequence only if overwrite_input."""
    if isinstance(data, np.ndarray):
        check_1d(data, "data")
        if overwrite_input:
            if not data.flags.writeable:
                raise ValidationError("data: overwrite_input=True requires a writeable array")
            return data
        return data.copy()

    if isinstance(data, (str, bytes)):
        raise ValidationError(f"data: expected a sequence of numbers, got {type(data).__name__}")
    if overwrite_input and isinstance(data, list):
        buffer = data
    else:
        try:
            buffer = list(data)
        except TypeError as e:
            raise ValidationError(f"data: expected a sequence, got {type(data).__name__}") from e

    if buffer and isinstance(buffer[0], (list, tuple, np.ndarray)):
        raise DimensionError("data: expected 1D data; use quantile_axis for N-dimensional arrays")
    return buffer


def quantile(
    data: ArrayLike | MutableSequence[Any],
    q: float,
    *,
    interpolate: InterpolateMethod = 'linear',
    less: Less = total_less,
    overwrite_input: bool = False,
) -> Any:
    """
    Compute one quantile of 1-D data.

    Parameters
    ----------
    data : 1-D ndarray or sequence
        Values of any type ordered by `less`. Not modified unless
        overwrite_input is True.
    q : float
        Quantile in [0, 1].
    interpolate : str
        'lower', 'higher', 'nearest', 'midpoint' or 'linear'.
    less : callable
        Strict ordering comparator. The default places NaN after every
        other value; pass strict_less to reject NaN.
    overwrite_input : bool
        Partition `data` itself (ndarray or list) instead of a copy.

    Returns
    -------
    The quantile value.

    Raises
    ------
    EmptyInputError
        If data is empty.
    InvalidQuantileError
        If q is NaN or outside [0, 1].
    """
    q = check_quantile(q)
    policy = get_interpolation(interpolate)
    buffer = _as_buffer(data, overwrite_input)
    return _lane_quantiles(buffer, [q], policy, less)[0]


def quantiles(
    data: ArrayLike | MutableSequence[Any],
    qs: ArrayLike,
    *,
    interpolate: InterpolateMethod = 'linear',
    less: Less = total_less,
    overwrite_input: bool = False,
) -> NDArray[Any]:
    """
    Compute several quantiles of 1-D data in one selection pass.

    Equivalent to calling quantile() once per q on fresh copies of
    data, but every partition step is shared between the quantiles.

    Returns
    -------
    NDArray
        One value per entry of qs, in the order given.
    """
    q_values = check_quantiles(qs)
    policy = get_interpolation(interpolate)
    buffer = _as_buffer(data, overwrite_input)
    return np.asarray(_lane_quantiles(buffer, q_values, policy, less))


def median(
    data: ArrayLike | MutableSequence[Any],
    *,
    interpolate: InterpolateMethod = 'linear',
    less: Less = total_less,
    overwrite_input: bool = False,
) -> Any:
    """Median of 1-D data; quantile(data, 0.5)."""
    return quantile(
        data, 0.5, interpolate=interpolate, less=less, overwrite_input=overwrite_input,
    )


def _result_dtype(dtype: np.dtype, policy: Interpolation) -> np.dtype:
    if policy is LINEAR or policy is MIDPOINT:
        return np.result_type(dtype, np.float64)
    return dtype


def _prepare_axis(a: ArrayLike, q: Any, axis: int) -> tuple[NDArray[Any], int, bool, list[float]]:
    arr = np.asarray(a)
    if arr.ndim == 0:
        raise DimensionError("a: expected at least a 1D array, got a scalar")
    axis = check_axis(axis, arr.ndim)
    if arr.shape[axis] == 0:
        raise EmptyInputError(
            f"a: axis {axis} has length 0 (shape {arr.shape})", name=f"axis {axis}"
        )
    scalar_q = np.ndim(q) == 0
    q_values = [check_quantile(q)] if scalar_q else check_quantiles(q)
    return arr, axis, scalar_q, q_values


def _finish_axis(result: NDArray[Any], axis: int, scalar_q: bool) -> NDArray[Any]:
    if scalar_q:
        return result[..., 0]
    return np.moveaxis(result, -1, axis)


def quantile_axis(
    a: ArrayLike,
    q: float | ArrayLike,
    *,
    axis: int,
    interpolate: InterpolateMethod = 'linear',
    less: Less = total_less,
    overwrite_input: bool = False,
) -> NDArray[Any]:
    """
    Compute quantiles along an axis of an N-dimensional array.

    Each 1-D lane along `axis` is handled independently.

    Parameters
    ----------
    a : array-like
        Input array, at least 1D.
    q : float or sequence of float
        Quantile(s) in [0, 1].
    axis : int
        Axis along which quantiles are computed. Negative values count
        from the end.
    interpolate : str
        'lower', 'higher', 'nearest', 'midpoint' or 'linear'.
    less : callable
        Strict ordering comparator.
    overwrite_input : bool
        If True and `a` is a writeable ndarray, its lanes are partitioned
        in place. The contents of `a` are then an arbitrary permutation
        along `axis`.

    Returns
    -------
    NDArray
        For scalar q, `a` with `axis` removed. For a sequence of q,
        `a` with `axis` replaced by an axis of length len(q).

    Raises
    ------
    EmptyInputError
        If `axis` has length 0.
    InvalidQuantileError
        If any q is NaN or outside [0, 1].
    DimensionError
        If `axis` does not exist.
    """
    arr, axis, scalar_q, q_values = _prepare_axis(a, q, axis)
    policy = get_interpolation(interpolate)

    if overwrite_input and isinstance(a, np.ndarray):
        if not a.flags.writeable:
            raise ValidationError("a: overwrite_input=True requires a writeable array")
        work = arr
    else:
        work = arr.copy()

    lanes = np.moveaxis(work, axis, -1)
    outer_shape = lanes.shape[:-1]
    result = np.empty(outer_shape + (len(q_values),), dtype=_result_dtype(arr.dtype, policy))
    for index in np.ndindex(*outer_shape):
        result[index] = _lane_quantiles(lanes[index], q_values, policy, less)

    return _finish_axis(result, axis, scalar_q)


def quantile_axis_skipnan(
    a: ArrayLike,
    q: float | ArrayLike,
    *,
    axis: int,
    interpolate: InterpolateMethod = 'linear',
) -> NDArray[Any]:
    """
    Compute quantiles along an axis, ignoring NaN.

    Lanes consisting only of NaN produce NaN. The input is never
    modified.

    See quantile_axis for parameters, return shape and errors.
    """
    arr, axis, scalar_q, q_values = _prepare_axis(a, q, axis)
    policy = get_interpolation(interpolate)

    if not np.issubdtype(arr.dtype, np.inexact):
        return quantile_axis(arr, q, axis=axis, interpolate=interpolate)

    lanes = np.moveaxis(arr, axis, -1)
    outer_shape = lanes.shape[:-1]
    result = np.empty(outer_shape + (len(q_values),), dtype=_result_dtype(arr.dtype, policy))
    for index in np.ndindex(*outer_shape):
        lane = lanes[index]
        clean = lane[~np.isnan(lane)]
        if clean.size == 0:
            result[index] = np.nan
        else:
            result[index] = _lane_quantiles(clean, q_values, policy, total_less)

    return _finish_axis(result, axis, scalar_q)


def median_axis(
    a: ArrayLike,
    *,
    axis: int,
    interpolate: InterpolateMethod = 'linear',
    less: Less = total_less,
    overwrite_input: bool = False,
) -> NDArray[Any]:
    """Median along an axis; quantile_axis(a, 0.5, axis=axis)."""
    return quantile_axis(
        a, 0.5, axis=axis, interpolate=interpolate, less=less,
        overwrite_input=overwrite_input,
    )
