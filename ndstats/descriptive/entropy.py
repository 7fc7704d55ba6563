"""
Information-theoretic summaries of discrete distributions.

Arrays are treated as probability mass functions; they are not
normalised. Logarithms are natural (nats) and 0 * log(0) is taken as 0.
Elementwise terms come from scipy.special, which implements these
conventions.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.special import rel_entr, xlogy

from ndstats.core.exceptions import DimensionMismatchError
from ndstats.core.validation import check_array, check_nonempty


def _pmf(p: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    arr = check_array(p, name)
    check_nonempty(arr, name)
    return arr


def _pmf_pair(p: ArrayLike, q: ArrayLike) -> tuple[NDArray[Any], NDArray[Any]]:
    x, y = _pmf(p, "p"), _pmf(q, "q")
    if x.shape != y.shape:
        raise DimensionMismatchError(
            f"shapes differ: p={x.shape}, q={y.shape}", expected=x.shape, actual=y.shape,
        )
    return x, y


def entropy(p: ArrayLike) -> float:
    """Shannon entropy, -sum(p * ln p)."""
    x = _pmf(p, "p")
    return float(-np.sum(xlogy(x, x)))


def kl_divergence(p: ArrayLike, q: ArrayLike) -> float:
    """
    Kullback-Leibler divergence D(p || q) = sum(p * ln(p / q)).

    +inf when q is 0 where p is positive.
    """
    x, y = _pmf_pair(p, q)
    return float(np.sum(rel_entr(x, y)))


def cross_entropy(p: ArrayLike, q: ArrayLike) -> float:
    """Cross entropy H(p, q) = -sum(p * ln q)."""
    x, y = _pmf_pair(p, q)
    with np.errstate(divide='ignore'):
        return float(-np.sum(xlogy(x, y)))
