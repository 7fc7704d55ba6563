"""
N-dimensional rectangular binning grids.

A Grid is the Cartesian product of one Bins per dimension. It maps a
point to its bin coordinate with one binary search per dimension.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.exceptions import (
    DimensionError,
    DimensionMismatchError,
    OutOfRangeError,
    ValidationError,
)
from ndstats.core.validation import check_2d, check_array, check_nonempty
from ndstats.histogram.bins import Bins, Edges
from ndstats.histogram.strategies import BinRule, BinsBuildingStrategy, get_strategy


def _as_bins(projection: Bins | Edges | ArrayLike) -> Bins:
    if isinstance(projection, Bins):
        return projection
    return Bins(projection)


class Grid:
    """
    Rectangular grid of bins, one Bins per dimension.

    Usage:
        grid = Grid([Edges([0, 1, 2, 3])])
        grid.index_of([1.5])    # (1,)
        grid.index_of([3.0])    # (2,)  top bin is closed
        grid.index_of([3.1])    # raises OutOfRangeError

    Args:
        projections: One Bins (or Edges, or boundary values) per dimension
    """

    __slots__ = ('_projections',)

    def __init__(self, projections: Sequence[Bins | Edges | ArrayLike]):
        bins = tuple(_as_bins(p) for p in projections)
        if not bins:
            raise ValidationError("Grid: need at least one dimension")
        self._projections = bins

    @property
    def projections(self) -> tuple[Bins, ...]:
        """Per-dimension Bins."""
        return self._projections

    @property
    def ndim(self) -> int:
        return len(self._projections)

    @property
    def shape(self) -> tuple[int, ...]:
        """Number of bins along each dimension."""
        return tuple(len(b) for b in self._projections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._projections == other._projections

    def __hash__(self) -> int:
        return hash(self._projections)

    def __repr__(self) -> str:
        return f"Grid(shape={self.shape})"

    def _coordinates(self, point: Any) -> tuple[Any, ...]:
        coords = np.asarray(point)
        if coords.ndim == 0:
            coords = coords.reshape(1)
        if coords.ndim != 1:
            raise DimensionError(
                f"point: expected a 1D sequence of coordinates, got shape {coords.shape}"
            )
        if coords.size != self.ndim:
            raise DimensionMismatchError(
                f"point has {coords.size} coordinates, grid has {self.ndim} dimensions",
                expected=self.ndim,
                actual=coords.size,
            )
        return tuple(coords.tolist())

    def index_of(self, point: Any) -> tuple[int, ...]:
        """
        Bin coordinate of a point.

        Args:
            point: One coordinate per dimension (a scalar is accepted
                for 1-D grids)

        Returns:
            Tuple of per-dimension bin indices

        Raises:
            OutOfRangeError: If any coordinate lies outside its dimension's
                range, or is NaN
            DimensionMismatchError: If the point has the wrong number of
                coordinates
        """
        coords = self._coordinates(point)
        index = []
        for axis, (value, bins) in enumerate(zip(coords, self._projections)):
            i = bins.index_of(value)
            if i is None:
                raise OutOfRangeError(
                    f"point {coords} is outside the grid on axis {axis}",
                    point=coords,
                    axis=axis,
                )
            index.append(i)
        return tuple(index)

    def index_array(self, points: ArrayLike) -> tuple[NDArray[np.intp], NDArray[np.bool_]]:
        """
        Bin coordinates of every row of an (n_points, ndim) array.

        Returns:
            (index, inside): integer coordinates of shape (n_points, ndim)
            and a mask of the rows that fall inside the grid. Rows of
            index outside the mask hold -1 on the offending axes.

        Raises:
            DimensionError: If points is not 2D
            DimensionMismatchError: If points has the wrong number of
                columns
        """
        arr = check_array(points, "points")
        check_2d(arr, "points")
        if arr.shape[1] != self.ndim:
            raise DimensionMismatchError(
                f"points have {arr.shape[1]} coordinates, grid has {self.ndim} dimensions",
                expected=self.ndim,
                actual=arr.shape[1],
            )
        index = np.empty(arr.shape, dtype=np.intp)
        for axis, bins in enumerate(self._projections):
            index[:, axis] = bins.index_array(arr[:, axis])
        return index, np.all(index >= 0, axis=1)

    def range_of(self, index: Sequence[int]) -> tuple[tuple[float, float], ...]:
        """
        Per-dimension (lo, hi) boundaries of the bin at `index`.

        Raises:
            DimensionMismatchError: If index has the wrong length
            IndexError: If a bin index is invalid
        """
        if len(index) != self.ndim:
            raise DimensionMismatchError(
                f"bin index has {len(index)} entries, grid has {self.ndim} dimensions",
                expected=self.ndim,
                actual=len(index),
            )
        return tuple(bins.range_of(i) for i, bins in zip(index, self._projections))


class GridBuilder:
    """
    Builds a Grid from data, one binning rule per dimension.

    Usage:
        grid = GridBuilder.from_array(points, 'fd').build()
        grid = GridBuilder.from_array(points, ['sturges', 'sqrt']).build()
    """

    def __init__(self, strategies: Sequence[BinsBuildingStrategy]):
        if not strategies:
            raise ValidationError("GridBuilder: need at least one strategy")
        self._strategies = tuple(strategies)

    @property
    def strategies(self) -> tuple[BinsBuildingStrategy, ...]:
        return self._strategies

    @classmethod
    def from_array(
        cls,
        points: ArrayLike,
        rule: BinRule | Sequence[BinRule] = 'auto',
        *,
        require_positive_width: bool = False,
    ) -> GridBuilder:
        """
        Fit one strategy per column of an (n_points, ndim) array.

        Args:
            points: 2D array, one row per observation
            rule: Rule name for every column, or one name per column
            require_positive_width: See bin_edges()

        Raises:
            DimensionError: If points is not 2D
            DimensionMismatchError: If the number of rules differs from
                the number of columns
            EmptyInputError: If there are no points
        """
        arr = check_array(points, "points")
        check_2d(arr, "points")
        check_nonempty(arr, "points")

        ndim = arr.shape[1]
        rules = [rule] * ndim if isinstance(rule, str) else list(rule)
        if len(rules) != ndim:
            raise DimensionMismatchError(
                f"got {len(rules)} rules for {ndim} dimensions",
                expected=ndim,
                actual=len(rules),
            )

        strategies = [
            get_strategy(r).from_sample(arr[:, j], require_positive_width=require_positive_width)
            for j, r in enumerate(rules)
        ]
        return cls(strategies)

    def build(self) -> Grid:
        return Grid([s.build() for s in self._strategies])
