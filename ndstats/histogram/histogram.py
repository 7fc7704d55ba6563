"""
Counting histograms over a Grid.

Counts only ever increase. Points outside the grid are dropped and
tallied in `out_of_range`, so that

    counts.sum() + out_of_range == n_observations

holds at all times. Because bin increments commute, histograms built
from disjoint parts of a data set over the same grid can be combined
with merge().
"""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.exceptions import OutOfRangeError, ValidationError
from ndstats.core.validation import check_array
from ndstats.histogram.grid import Grid


class Histogram:
    """
    N-dimensional counting array co-indexed with a Grid.

    Usage:
        hist = Histogram(grid)
        hist.add_observation([0.5, 2.0])
        hist.add_all(points)
        hist.counts         # read-only int64 array of shape grid.shape
        hist.out_of_range   # number of dropped points
    """

    def __init__(self, grid: Grid):
        if not isinstance(grid, Grid):
            raise ValidationError(f"grid: expected a Grid, got {type(grid).__name__}")
        self._grid = grid
        self._counts = np.zeros(grid.shape, dtype=np.int64)
        self._out_of_range = 0

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def ndim(self) -> int:
        return self._grid.ndim

    @property
    def counts(self) -> NDArray[np.int64]:
        """Read-only view of the bin counts."""
        view = self._counts.view()
        view.flags.writeable = False
        return view

    @property
    def out_of_range(self) -> int:
        """Number of observations dropped because they fell outside the grid."""
        return self._out_of_range

    @property
    def n_observations(self) -> int:
        """All observations folded in, counted or dropped."""
        return int(self._counts.sum()) + self._out_of_range

    def add_observation(self, point: Any) -> bool:
        """
        Count one point.

        Returns:
            True if the point was counted, False if it was out of range

        Raises:
            DimensionMismatchError: If the point has the wrong number of
                coordinates (nothing is counted)
        """
        try:
            index = self._grid.index_of(point)
        except OutOfRangeError:
            self._out_of_range += 1
            return False
        self._counts[index] += 1
        return True

    def add_all(self, points: ArrayLike | Iterable[Any]) -> int:
        """
        Count every point of an (n_points, ndim) array.

        For a 1-D grid, a 1-D array of values is accepted. Dimensions are
        checked before any point is counted. Points are binned with one
        vectorised lookup per axis and accumulated with np.add.at.

        Returns:
            Number of points that were counted (not dropped)
        """
        if not isinstance(points, (np.ndarray, list, tuple)):
            points = list(points)
        arr = check_array(points, "points")
        if arr.ndim == 1 and (self.ndim == 1 or arr.size == 0):
            arr = arr.reshape(-1, self.ndim)

        index, inside = self._grid.index_array(arr)
        counted = int(np.count_nonzero(inside))
        np.add.at(self._counts, tuple(index[inside].T), 1)
        self._out_of_range += arr.shape[0] - counted
        return counted

    def merge(self, other: Histogram) -> Histogram:
        """
        Sum of two histograms over equal grids, as a new Histogram.

        Raises:
            ValidationError: If the grids differ
        """
        if self._grid != other._grid:
            raise ValidationError(
                f"cannot merge histograms over different grids: {self._grid!r} vs {other._grid!r}"
            )
        merged = Histogram(self._grid)
        merged._counts = self._counts + other._counts
        merged._out_of_range = self._out_of_range + other._out_of_range
        return merged

    def __repr__(self) -> str:
        return (
            f"Histogram(shape={self._grid.shape}, counted={int(self._counts.sum())}, "
            f"out_of_range={self._out_of_range})"
        )


def histogram(points: ArrayLike, grid: Grid) -> Histogram:
    """Fold an (n_points, ndim) array into a new Histogram over grid."""
    hist = Histogram(grid)
    hist.add_all(points)
    return hist
