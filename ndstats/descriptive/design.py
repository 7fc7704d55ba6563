"""
DescriptiveDesign: the observations x variables view used by describe().

Arrays are normalised so that observations run down axis 0 and each
column is one variable. NaN marks a missing value; lane() applies the
skipnan policy one column at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from ndstats.core.exceptions import ValidationError
from ndstats.core.validation import check_2d, check_array, check_axis, check_nonempty


@dataclass(frozen=True)
class DescriptiveDesign:
    """
    Design for descriptive statistics.

    Construction:
        DescriptiveDesign.from_array(data)          # rows are observations
        DescriptiveDesign.from_array(data, axis=1)  # rows are variables
    """
    _data: NDArray[np.floating[Any]]
    _columns: tuple[str, ...] | None

    @classmethod
    def from_array(cls, data, *, axis: int = 0) -> DescriptiveDesign:
        """
        Build a design from array-like data.

        Parameters
        ----------
        data : array-like
            1D or 2D data. Objects with `.values` and `.columns` (a pandas
            DataFrame) keep their column names when axis is 0.
        axis : int
            Axis along which observations run. 1D input is one variable.

        Raises
        ------
        DimensionError
            If data has more than 2 dimensions or axis is out of bounds.
        EmptyInputError
            If there are no observations or no variables.
        ValidationError
            If data is non-numeric or contains infinite values.
        """
        columns = None
        if hasattr(data, 'values') and not isinstance(data, np.ndarray):
            if hasattr(data, 'columns'):
                columns = tuple(str(c) for c in data.columns)
            data = data.values
        arr = check_array(data, "data")
        axis = check_axis(axis, max(arr.ndim, 1))

        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        check_2d(arr, "data")
        if axis == 1:
            arr = arr.T
            columns = None
        check_nonempty(arr, "data")

        inf_rows, inf_cols = np.nonzero(np.isinf(arr))
        if inf_rows.size:
            raise ValidationError(
                f"data: contains infinite values (first at observation {inf_rows[0]}, "
                f"variable {inf_cols[0]})"
            )
        return cls(_data=arr, _columns=columns)

    @property
    def data(self) -> NDArray[np.floating[Any]]:
        """Data matrix (n x p), may contain NaN."""
        return self._data

    @property
    def n(self) -> int:
        return self._data.shape[0]

    @property
    def p(self) -> int:
        return self._data.shape[1]

    @property
    def columns(self) -> tuple[str, ...] | None:
        """Column names, or None if not available."""
        return self._columns

    @property
    def labels(self) -> tuple[str, ...]:
        """Column names, or V1..Vp when the data carried none."""
        return self._columns or tuple(f"V{j + 1}" for j in range(self.p))

    @property
    def missing(self) -> NDArray[np.int64]:
        """Missing values per column, shape (p,)."""
        return np.isnan(self._data).sum(axis=0)

    @property
    def n_missing(self) -> int:
        return int(self.missing.sum())

    @property
    def has_missing(self) -> bool:
        return self.n_missing > 0

    def lane(self, j: int, *, skipnan: bool) -> NDArray[np.floating[Any]] | None:
        """
        Values of column j under the missing-data policy.

        With skipnan, NaN values are dropped (the lane may be empty).
        Without it, a column holding any NaN gives None: every statistic
        of that column is NaN.
        """
        col = self._data[:, j]
        missing = np.isnan(col)
        if not missing.any():
            return col
        if not skipnan:
            return None
        return col[~missing]

    def __repr__(self) -> str:
        missing = f", missing={self.n_missing}" if self.has_missing else ""
        return f"DescriptiveDesign(n={self.n}, p={self.p}{missing})"
