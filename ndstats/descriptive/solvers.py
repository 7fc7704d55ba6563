"""
Solver entry points for column-wise descriptive statistics.

Provides describe() as the comprehensive entry point and summary() for
the six-number summary. Quantiles come from the selection-based
quantile engine.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.result import ColumnWarning, Result
from ndstats.core.validation import check_quantiles
from ndstats.descriptive.design import DescriptiveDesign
from ndstats.descriptive.solution import DescriptiveParams, DescriptiveSolution
from ndstats.descriptive import moments as _moments
from ndstats.quantile.interpolate import InterpolateMethod, get_interpolation
from ndstats.quantile.solvers import quantiles as _quantiles

DEFAULT_PROBS = (0.0, 0.25, 0.5, 0.75, 1.0)
_SUMMARY_PROBS = (0.0, 0.25, 0.5, 0.75, 1.0)


class _Sections:
    """Wall-clock seconds per named section, summed over columns."""

    def __init__(self):
        self._start = time.perf_counter()
        self._seconds: dict[str, float] = {}

    @contextmanager
    def __call__(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self._seconds[name] = self._seconds.get(name, 0.0) + elapsed

    def report(self) -> dict[str, float]:
        return {'total_seconds': time.perf_counter() - self._start, **self._seconds}


def _ensure_design(data: ArrayLike | DescriptiveDesign, axis: int) -> DescriptiveDesign:
    """Convert raw array to DescriptiveDesign if needed."""
    if isinstance(data, DescriptiveDesign):
        return data
    return DescriptiveDesign.from_array(data, axis=axis)


def _compute(
    design: DescriptiveDesign,
    *,
    compute: set[str],
    probs: NDArray[np.floating[Any]],
    interpolate: str,
    skipnan: bool,
) -> Result[DescriptiveParams]:
    """Column loop shared by describe() and summary()."""
    section = _Sections()
    p = design.p
    names = design.labels
    notes: list[ColumnWarning] = []

    stats = {
        name: np.full(p, np.nan)
        for name in ('mean', 'var', 'sd', 'skewness', 'kurtosis')
    }
    quantile_table = np.full((len(probs), p), np.nan)
    summary_table = np.full((6, p), np.nan)
    n_used = np.zeros(p, dtype=np.int64)

    for j in range(p):
        clean = design.lane(j, skipnan=skipnan)
        if clean is None:
            n_used[j] = design.n
            continue
        n = clean.size
        n_used[j] = n
        if n == 0:
            notes.append(ColumnWarning(names[j], "no non-missing observations"))
            continue

        with section('mean'):
            stats['mean'][j] = _moments.mean(clean)

        if 'var' in compute:
            with section('variance'):
                if n < 2:
                    notes.append(ColumnWarning(names[j], "variance needs at least 2 observations"))
                else:
                    stats['var'][j] = np.var(clean, ddof=1)
                    stats['sd'][j] = np.sqrt(stats['var'][j])

        if 'moments' in compute:
            with section('moments'):
                if n >= 2 and np.all(clean == clean[0]):
                    notes.append(
                        ColumnWarning(names[j], "zero variance, skewness and kurtosis undefined")
                    )
                if n < 3:
                    notes.append(ColumnWarning(names[j], "skewness needs at least 3 observations"))
                if n < 4:
                    notes.append(ColumnWarning(names[j], "kurtosis needs at least 4 observations"))
                stats['skewness'][j] = _moments.skewness(clean, adjusted=True)
                stats['kurtosis'][j] = _moments.kurtosis(clean, adjusted=True)

        if 'quantiles' in compute:
            with section('quantiles'):
                quantile_table[:, j] = _quantiles(clean, probs, interpolate=interpolate)

        if 'summary' in compute:
            with section('summary'):
                q_min, q1, med, q3, q_max = _quantiles(clean, _SUMMARY_PROBS)
                summary_table[:, j] = (q_min, q1, med, stats['mean'][j], q3, q_max)

    params = DescriptiveParams(
        mean=stats['mean'],
        variance=stats['var'] if 'var' in compute else None,
        sd=stats['sd'] if 'var' in compute else None,
        skewness=stats['skewness'] if 'moments' in compute else None,
        kurtosis=stats['kurtosis'] if 'moments' in compute else None,
        quantiles=quantile_table if 'quantiles' in compute else None,
        quantile_probs=probs if 'quantiles' in compute else None,
        interpolate=interpolate if 'quantiles' in compute else None,
        summary_table=summary_table if 'summary' in compute else None,
        n_used=n_used,
    )

    return Result(
        params=params,
        columns=names,
        info={'skipnan': skipnan, 'interpolate': interpolate, 'computed': sorted(compute)},
        timing=section.report(),
        notes=tuple(notes),
    )


def describe(
    data: ArrayLike | DescriptiveDesign,
    *,
    probs: ArrayLike | None = None,
    interpolate: InterpolateMethod = 'linear',
    skipnan: bool = False,
    axis: int = 0,
) -> DescriptiveSolution:
    """
    Compute comprehensive column-wise descriptive statistics.

    Computes: mean, variance, standard deviation, bias-adjusted skewness
    and excess kurtosis, quantiles and the six-number summary.

    Parameters
    ----------
    data : array-like or DescriptiveDesign
        1D or 2D data matrix (observations x variables).
    probs : array-like, optional
        Quantile probabilities in [0, 1]. Default (0, 0.25, 0.5, 0.75, 1).
    interpolate : str
        Interpolation policy for the quantiles.
    skipnan : bool
        If False (default), a column containing NaN yields NaN for every
        statistic. If True, NaN values are dropped column by column.
    axis : int
        Axis along which observations run (ignored for a
        DescriptiveDesign).

    Returns
    -------
    DescriptiveSolution with all statistics populated.
    """
    design = _ensure_design(data, axis)
    policy = get_interpolation(interpolate)
    q_probs = np.asarray(check_quantiles(DEFAULT_PROBS if probs is None else probs))

    result = _compute(
        design,
        compute={'var', 'moments', 'quantiles', 'summary'},
        probs=q_probs,
        interpolate=policy.name,
        skipnan=skipnan,
    )
    return DescriptiveSolution(_result=result, _design=design)


def summary(
    x: ArrayLike | DescriptiveDesign,
    *,
    skipnan: bool = False,
    axis: int = 0,
) -> DescriptiveSolution:
    """
    Compute the six-number summary per column.

    Min, Q1, Median, Mean, Q3, Max with linear interpolation.

    Returns
    -------
    DescriptiveSolution with summary_table and mean populated.
    """
    design = _ensure_design(x, axis)
    result = _compute(
        design,
        compute={'summary'},
        probs=np.asarray(_SUMMARY_PROBS),
        interpolate='linear',
        skipnan=skipnan,
    )
    return DescriptiveSolution(_result=result, _design=design)
