"""
Histogram module.

Public API:
    bin_edges(sample, rule)          - Edges from a binning rule
    Edges, Bins                      - 1-D bin boundaries
    Sturges, Rice, Sqrt, Scott,
    FreedmanDiaconis, Auto           - Binning rules
    Grid, GridBuilder                - N-dimensional bin grids
    Histogram, histogram(points, g)  - Counting histograms
"""

from ndstats.histogram.bins import Bins, Edges
from ndstats.histogram.strategies import (
    MAX_BINS,
    STRATEGIES,
    Auto,
    BinRule,
    BinsBuildingStrategy,
    FreedmanDiaconis,
    Rice,
    Scott,
    Sqrt,
    Sturges,
    bin_edges,
    get_strategy,
    interquartile_range,
)
from ndstats.histogram.grid import Grid, GridBuilder
from ndstats.histogram.histogram import Histogram, histogram

__all__ = [
    "Bins",
    "Edges",
    "MAX_BINS",
    "STRATEGIES",
    "Auto",
    "BinRule",
    "BinsBuildingStrategy",
    "FreedmanDiaconis",
    "Rice",
    "Scott",
    "Sqrt",
    "Sturges",
    "bin_edges",
    "get_strategy",
    "interquartile_range",
    "Grid",
    "GridBuilder",
    "Histogram",
    "histogram",
]
