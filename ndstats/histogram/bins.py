"""
One-dimensional bin boundaries.

Edges holds n + 1 strictly increasing finite boundaries and defines n
intervals [e[i], e[i+1]). The last interval is closed on both ends, so
the largest boundary (usually the sample maximum) falls in the top bin.

Bins is the per-dimension binning scheme used by Grid.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Any, Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.exceptions import ValidationError
from ndstats.core.validation import check_array, check_finite
from ndstats.order.total_order import is_nan


class Edges:
    """
    Sorted, de-duplicated bin boundaries.

    Input values are sorted and duplicates removed, so any collection of
    at least two distinct finite numbers is accepted.

    Raises:
        ValidationError: If values contain NaN/Inf or fewer than two
            distinct values
    """

    __slots__ = ('_values',)

    def __init__(self, values: ArrayLike):
        arr = check_array(values, "edges").ravel()
        check_finite(arr, "edges")
        unique = np.unique(arr)
        if unique.size < 2:
            raise ValidationError(
                f"edges: need at least 2 distinct values to form a bin, got {unique.size}"
            )
        self._values = tuple(float(v) for v in unique)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, i: int) -> float:
        return self._values[i]

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edges):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"Edges({list(self._values)!r})"

    def as_array(self) -> NDArray[np.float64]:
        """Boundaries as a new float64 array."""
        return np.array(self._values, dtype=np.float64)

    def indices_of(self, value: Any) -> tuple[int, int] | None:
        """
        Indices (i, i + 1) of the boundaries enclosing value.

        Uses binary search. The interval is [e[i], e[i+1]) except for the
        last one, which also contains e[-1].

        Returns:
            (i, i + 1), or None if value is NaN or outside [e[0], e[-1]]
        """
        if is_nan(value):
            return None
        values = self._values
        last = len(values) - 1
        if value == values[last]:
            return last - 1, last
        i = bisect_right(values, value) - 1
        if i < 0 or i >= last:
            return None
        return i, i + 1


class Bins:
    """
    Bins defined by an Edges instance.

    Usage:
        bins = Bins(Edges([0, 1, 2, 3]))
        len(bins)            # 3
        bins.index_of(1.5)   # 1
        bins.index_of(3.0)   # 2 (top bin is closed)
        bins.index_of(3.1)   # None
        bins.range_of(1)     # (1.0, 2.0)
    """

    __slots__ = ('_edges',)

    def __init__(self, edges: Edges | ArrayLike):
        self._edges = edges if isinstance(edges, Edges) else Edges(edges)

    @property
    def edges(self) -> Edges:
        return self._edges

    def __len__(self) -> int:
        return len(self._edges) - 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bins):
            return NotImplemented
        return self._edges == other._edges

    def __hash__(self) -> int:
        return hash(self._edges)

    def __repr__(self) -> str:
        return f"Bins(n_bins={len(self)}, range=({self._edges[0]}, {self._edges[-1]}))"

    def index_of(self, value: Any) -> int | None:
        """Index of the bin containing value, or None if out of range."""
        indices = self._edges.indices_of(value)
        return None if indices is None else indices[0]

    def index_array(self, values: ArrayLike) -> NDArray[np.intp]:
        """
        index_of over an array of values, with -1 for values out of range.

        Same interval rules as index_of: searchsorted on the boundaries,
        with values equal to the top boundary moved into the last bin.
        """
        values = np.asarray(values, dtype=np.float64)
        edges = self._edges.as_array()
        n = len(self)
        index = np.searchsorted(edges, values, side='right') - 1
        index[values == edges[-1]] = n - 1
        index[(index < 0) | (index >= n) | np.isnan(values)] = -1
        return index

    def range_of(self, index: int) -> tuple[float, float]:
        """
        Boundaries (lo, hi) of bin `index`.

        Raises:
            IndexError: If index is not a valid bin index
        """
        n = len(self)
        if not 0 <= index < n:
            raise IndexError(f"bin index {index} out of range for {n} bins")
        return self._edges[index], self._edges[index + 1]
