"""
Quantile and order-statistic module.

Public API:
    quantile(data, q)                 - One quantile of 1-D data
    quantiles(data, qs)               - Several quantiles, one selection pass
    median(data)                      - Median of 1-D data
    quantile_axis(a, q, axis=...)     - Quantiles along an axis
    quantile_axis_skipnan(a, q, ...)  - Quantiles along an axis, NaN ignored
    median_axis(a, axis=...)          - Median along an axis
    argmin/argmax/min/max             - Extremes (NaN rejected)
    *_skipnan                         - Extremes ignoring NaN
    get_interpolation(name)           - Interpolation policy lookup
"""

from ndstats.quantile.interpolate import (
    INTERPOLATIONS,
    InterpolateMethod,
    Interpolation,
    get_interpolation,
)
from ndstats.quantile.solvers import (
    median,
    median_axis,
    quantile,
    quantile_axis,
    quantile_axis_skipnan,
    quantiles,
)
from ndstats.quantile.extrema import (
    argmax,
    argmax_skipnan,
    argmin,
    argmin_skipnan,
    max,
    max_skipnan,
    min,
    min_skipnan,
)

__all__ = [
    "quantile",
    "quantiles",
    "median",
    "quantile_axis",
    "quantile_axis_skipnan",
    "median_axis",
    "argmin",
    "argmax",
    "min",
    "max",
    "argmin_skipnan",
    "argmax_skipnan",
    "min_skipnan",
    "max_skipnan",
    "INTERPOLATIONS",
    "InterpolateMethod",
    "Interpolation",
    "get_interpolation",
]
