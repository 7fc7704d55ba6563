"""
Rules for choosing histogram bins from a 1-D sample.

Each rule is a pure function of summary statistics of the sample
(count n, min, max, standard deviation, interquartile range):

    sturges  n_bins = ceil(log2(n) + 1)
    rice     n_bins = ceil(2 * n^(1/3))
    sqrt     n_bins = ceil(sqrt(n))
    scott    width  = 3.49 * sd * n^(-1/3)      (population sd, ddof=0)
    fd       width  = 2 * IQR * n^(-1/3)        (Freedman-Diaconis)
    auto     more bins of sturges and fd; sturges when fd is degenerate

Width-based rules derive n_bins = ceil((max - min) / width). Edges are
then placed uniformly: numpy.linspace(min, max, n_bins + 1).

Degenerate samples fall back to a single bin: [min, max] when
min < max, [v - 0.5, v + 0.5] for a constant sample v. A sample is
degenerate when its range is zero, when the rule gives zero width, or
when the range is too narrow for n_bins + 1 distinct float boundaries.
The fallback emits a RuntimeWarning. Callers that need a strictly
positive data-derived width pass require_positive_width=True to get
DegenerateSampleError instead.

A width rule asking for more than MAX_BINS bins (a tiny width next to a
far outlier) raises DegenerateSampleError regardless.

References:
    Scott, D.W. (1979) "On optimal and data-based histograms",
    Biometrika, 66(3), 605-610.
    Freedman, D. and Diaconis, P. (1981) "On the histogram as a density
    estimator: L2 theory", Z. Wahrscheinlichkeitstheorie, 57, 453-476.
"""

from __future__ import annotations

import math
import warnings
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndstats.core.exceptions import DegenerateSampleError, ValidationError
from ndstats.core.validation import check_array, check_finite, check_nonempty
from ndstats.histogram.bins import Bins, Edges
from ndstats.quantile.solvers import quantiles

BinRule = Literal['sturges', 'rice', 'sqrt', 'scott', 'fd', 'auto']

SCOTT_FACTOR = 3.49
FD_FACTOR = 2.0
# Half-width of the single bin built around a constant sample.
DEGENERATE_HALF_WIDTH = 0.5
# Upper bound on the bin count a width-based rule may produce.
MAX_BINS = 1_000_000


def _check_sample(sample: ArrayLike) -> NDArray[np.floating[Any]]:
    arr = check_array(sample, "sample").ravel()
    check_nonempty(arr, "sample")
    check_finite(arr, "sample")
    return arr


def _representable(lo: float, hi: float, n_bins: int) -> bool:
    """Whether linspace(lo, hi, n_bins + 1) is finite and strictly increasing."""
    edges = np.linspace(lo, hi, n_bins + 1)
    return bool(np.all(np.isfinite(edges)) and np.all(np.diff(edges) > 0))


def interquartile_range(sample: ArrayLike) -> float:
    """IQR = Q3 - Q1 with linear interpolation."""
    arr = _check_sample(sample)
    q1, q3 = quantiles(arr, [0.25, 0.75], interpolate='linear')
    return float(q3 - q1)


class BinsBuildingStrategy(ABC):
    """
    Base class of the binning rules.

    Construct with from_sample(); read n_bins / bin_width; call build()
    for the Bins.

    Attributes:
        n_bins: Number of bins the rule produces
        value_range: (min, max) of the sample
        degenerate: Whether the single-bin fallback was used
    """
    name: ClassVar[str]

    def __init__(self, n_bins: int, value_range: tuple[float, float], degenerate: bool = False):
        if n_bins < 1:
            raise ValidationError(f"n_bins must be at least 1, got {n_bins}")
        lo, hi = value_range
        if lo < hi and not _representable(lo, hi, int(n_bins)):
            raise ValidationError(
                f"range [{lo}, {hi}] cannot hold {n_bins} bins with distinct boundaries"
            )
        self.n_bins = int(n_bins)
        self.value_range = value_range
        self.degenerate = degenerate

    @classmethod
    def from_sample(
        cls,
        sample: ArrayLike,
        *,
        require_positive_width: bool = False,
    ):
        """
        Apply the rule to a sample.

        Raises:
            EmptyInputError: If the sample is empty
            ValidationError: If the sample contains NaN or Inf
            DegenerateSampleError: If the rule gives zero width and
                require_positive_width is True, or if a width rule asks
                for more than MAX_BINS bins
        """
        arr = _check_sample(sample)
        lo, hi = float(arr.min()), float(arr.max())
        n_bins = cls._n_bins(arr, lo, hi) if hi > lo else None
        if n_bins is None:
            return cls._fallback(lo, hi, require_positive_width, "zero bin width")
        if not _representable(lo, hi, n_bins):
            return cls._fallback(
                lo, hi, require_positive_width,
                f"range too narrow for {n_bins} distinct bins",
            )
        return cls(n_bins, (lo, hi))

    @classmethod
    def _fallback(cls, lo: float, hi: float, require_positive_width: bool, reason: str):
        if require_positive_width:
            raise DegenerateSampleError(
                f"{cls.name}: {reason} (range [{lo}, {hi}])",
                strategy=cls.name,
                value_range=(lo, hi),
            )
        warnings.warn(
            f"{cls.name}: {reason} for sample range [{lo}, {hi}]; "
            f"using a single bin",
            RuntimeWarning,
            stacklevel=3,
        )
        return cls(1, (lo, hi), degenerate=True)

    @classmethod
    @abstractmethod
    def _n_bins(cls, sample: NDArray[np.floating[Any]], lo: float, hi: float) -> int | None:
        """Bin count for a sample with lo < hi, or None if the rule degenerates."""

    @property
    def bin_width(self) -> float:
        edges = self.edges()
        return edges[1] - edges[0]

    def edges(self) -> Edges:
        lo, hi = self.value_range
        if hi == lo:
            return Edges([lo - DEGENERATE_HALF_WIDTH, hi + DEGENERATE_HALF_WIDTH])
        return Edges(np.linspace(lo, hi, self.n_bins + 1))

    def build(self) -> Bins:
        return Bins(self.edges())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_bins={self.n_bins}, range={self.value_range})"


class _CountRule(BinsBuildingStrategy):
    @classmethod
    def _n_bins(cls, sample, lo, hi):
        return max(1, math.ceil(cls._count(sample.size)))

    @staticmethod
    @abstractmethod
    def _count(n: int) -> float:
        ...


class _WidthRule(BinsBuildingStrategy):
    @classmethod
    def _n_bins(cls, sample, lo, hi):
        width = cls._width(sample)
        if not width > 0:
            return None
        count = (hi - lo) / width
        if not count <= MAX_BINS:
            raise DegenerateSampleError(
                f"{cls.name}: bin width {width!r} over range [{lo}, {hi}] "
                f"gives more than {MAX_BINS} bins",
                strategy=cls.name,
                value_range=(lo, hi),
            )
        return max(1, math.ceil(count))

    @staticmethod
    @abstractmethod
    def _width(sample: NDArray[np.floating[Any]]) -> float:
        ...


class Sturges(_CountRule):
    """ceil(log2(n) + 1) bins. Assumes roughly normal data."""
    name = 'sturges'

    @staticmethod
    def _count(n):
        return math.log2(n) + 1


class Rice(_CountRule):
    """ceil(2 * n^(1/3)) bins."""
    name = 'rice'

    @staticmethod
    def _count(n):
        return 2 * n ** (1.0 / 3.0)


class Sqrt(_CountRule):
    """ceil(sqrt(n)) bins."""
    name = 'sqrt'

    @staticmethod
    def _count(n):
        return math.sqrt(n)


class Scott(_WidthRule):
    """Width 3.49 * sd * n^(-1/3)."""
    name = 'scott'

    @staticmethod
    def _width(sample):
        return SCOTT_FACTOR * float(np.std(sample)) * sample.size ** (-1.0 / 3.0)


class FreedmanDiaconis(_WidthRule):
    """Width 2 * IQR * n^(-1/3). Robust to outliers."""
    name = 'fd'

    @staticmethod
    def _width(sample):
        return FD_FACTOR * interquartile_range(sample) * sample.size ** (-1.0 / 3.0)


class Auto(BinsBuildingStrategy):
    """
    The larger bin count of Sturges and Freedman-Diaconis.

    Sturges does well on small samples, Freedman-Diaconis on large ones.
    When the IQR is zero only Sturges is used.
    """
    name = 'auto'

    @classmethod
    def _n_bins(cls, sample, lo, hi):
        sturges = Sturges._n_bins(sample, lo, hi)
        fd = FreedmanDiaconis._n_bins(sample, lo, hi)
        if fd is None:
            return sturges
        return max(sturges, fd)


STRATEGIES: dict[str, type[BinsBuildingStrategy]] = {
    cls.name: cls for cls in (Sturges, Rice, Sqrt, Scott, FreedmanDiaconis, Auto)
}


def get_strategy(rule: BinRule) -> type[BinsBuildingStrategy]:
    """
    Resolve a rule name.

    Raises:
        ValidationError: If the name is unknown
    """
    try:
        return STRATEGIES[rule]
    except (KeyError, TypeError):
        raise ValidationError(
            f"Unknown binning rule: {rule!r}. Must be one of {sorted(STRATEGIES)} "
            f"or a sequence of explicit edges."
        ) from None


def bin_edges(
    sample: ArrayLike,
    rule: BinRule | ArrayLike = 'auto',
    *,
    require_positive_width: bool = False,
) -> Edges:
    """
    Bin boundaries for a 1-D sample.

    Parameters
    ----------
    sample : array-like
        Finite values; flattened.
    rule : str or array-like
        A rule name ('sturges', 'rice', 'sqrt', 'scott', 'fd', 'auto'),
        or explicit boundary values.
    require_positive_width : bool
        Raise DegenerateSampleError instead of falling back to a single
        bin when the rule gives zero width.

    Returns
    -------
    Edges
        n_bins + 1 strictly increasing boundaries.
    """
    if isinstance(rule, str):
        return get_strategy(rule).from_sample(
            sample, require_positive_width=require_positive_width,
        ).edges()

    _check_sample(sample)
    return Edges(rule)
