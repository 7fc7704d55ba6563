"""
Covariance and Pearson correlation matrices.

Input is an (n observations x p variables) matrix; 1-D input is one
variable.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.exceptions import ValidationError
from ndstats.core.validation import check_2d, check_array, check_nonempty


def _as_matrix(x: ArrayLike) -> NDArray[np.floating[Any]]:
    arr = check_array(x, "x")
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    check_2d(arr, "x")
    check_nonempty(arr, "x")
    return arr


def cov(x: ArrayLike, *, ddof: int = 1) -> NDArray[np.floating[Any]]:
    """
    Covariance matrix, shape (p, p).

    ddof=1 gives the Bessel-corrected estimator; ddof=0 the population
    one.

    Raises:
        ValidationError: If n - ddof <= 0
    """
    data = _as_matrix(x)
    n = data.shape[0]
    if n - ddof <= 0:
        raise ValidationError(f"ddof={ddof} requires more than {ddof} observations, got {n}")
    return np.atleast_2d(np.cov(data, rowvar=False, ddof=ddof))


def pearson_correlation(x: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Pearson correlation matrix, shape (p, p).

    A zero-variance variable has NaN correlation with every other
    variable. The diagonal is 1.

    Raises:
        ValidationError: If there are fewer than 2 observations
    """
    data = _as_matrix(x)
    if data.shape[0] < 2:
        raise ValidationError(f"x: requires at least 2 observations, got {data.shape[0]}")
    cov_mat = np.atleast_2d(np.cov(data, rowvar=False, ddof=1))
    sd = np.sqrt(np.diag(cov_mat))
    with np.errstate(divide='ignore', invalid='ignore'):
        cor_mat = cov_mat / np.outer(sd, sd)
    np.fill_diagonal(cor_mat, 1.0)
    return cor_mat
