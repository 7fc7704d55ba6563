"""
ndstats: order statistics, quantiles and histograms for n-dimensional arrays.

Submodules:
    order: Total order over floats and in-place quickselect
    quantile: Quantiles, medians and extremes along an axis
    histogram: Binning rules, bin grids and counting histograms
    descriptive: Moments, deviations, correlation, entropy, describe()
"""

__version__ = "0.1.0"

from ndstats import order
from ndstats import quantile
from ndstats import histogram
from ndstats import descriptive

__all__ = [
    "__version__",
    "order",
    "quantile",
    "histogram",
    "descriptive",
]
