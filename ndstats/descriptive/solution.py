"""
Descriptive statistics solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from ndstats.core.result import Result

if TYPE_CHECKING:
    from ndstats.descriptive.design import DescriptiveDesign

SUMMARY_ROWS = ("Min.", "1st Qu.", "Median", "Mean", "3rd Qu.", "Max.")


@dataclass(frozen=True)
class DescriptiveParams:
    """
    Parameter payload for descriptive statistics.

    All fields are optional (None if not computed). describe() populates
    all; summary() populates the summary table and mean.
    """
    # Per-column statistics: arrays of shape (p,)
    mean: NDArray[np.floating[Any]] | None = None
    variance: NDArray[np.floating[Any]] | None = None
    sd: NDArray[np.floating[Any]] | None = None
    skewness: NDArray[np.floating[Any]] | None = None
    kurtosis: NDArray[np.floating[Any]] | None = None

    # Quantiles: shape (n_probs, p)
    quantiles: NDArray[np.floating[Any]] | None = None
    quantile_probs: NDArray[np.floating[Any]] | None = None
    interpolate: str | None = None

    # Summary table: shape (6, p); rows: Min, Q1, Median, Mean, Q3, Max
    summary_table: NDArray[np.floating[Any]] | None = None

    # Non-missing observations per column, shape (p,)
    n_used: NDArray[np.integer[Any]] | None = None


@dataclass
class DescriptiveSolution:
    """
    User-facing descriptive statistics results.

    Wraps Result[DescriptiveParams] and provides convenient accessors.
    """
    _result: Result[DescriptiveParams]
    _design: 'DescriptiveDesign'

    # --- Per-column statistics ---

    @property
    def mean(self) -> NDArray[np.floating[Any]] | None:
        """Per-column means, shape (p,)."""
        return self._result.params.mean

    @property
    def variance(self) -> NDArray[np.floating[Any]] | None:
        """Per-column variance (Bessel-corrected, n-1), shape (p,)."""
        return self._result.params.variance

    @property
    def sd(self) -> NDArray[np.floating[Any]] | None:
        """Per-column standard deviation, shape (p,)."""
        return self._result.params.sd

    @property
    def skewness(self) -> NDArray[np.floating[Any]] | None:
        """Per-column skewness, shape (p,)."""
        return self._result.params.skewness

    @property
    def kurtosis(self) -> NDArray[np.floating[Any]] | None:
        """Per-column excess kurtosis, shape (p,)."""
        return self._result.params.kurtosis

    # --- Quantiles ---

    @property
    def quantiles(self) -> NDArray[np.floating[Any]] | None:
        """Quantile values, shape (n_probs, p)."""
        return self._result.params.quantiles

    @property
    def quantile_probs(self) -> NDArray[np.floating[Any]] | None:
        """Probabilities used for quantile computation."""
        return self._result.params.quantile_probs

    @property
    def interpolate(self) -> str | None:
        """Interpolation policy used for quantiles."""
        return self._result.params.interpolate

    # --- Summary ---

    @property
    def summary_table(self) -> NDArray[np.floating[Any]] | None:
        """Six-number summary (6, p): Min, Q1, Median, Mean, Q3, Max."""
        return self._result.params.summary_table

    @property
    def n_used(self) -> NDArray[np.integer[Any]] | None:
        """Observations used per column."""
        return self._result.params.n_used

    # --- Metadata ---

    @property
    def columns(self) -> tuple[str, ...] | None:
        """Column names from the design."""
        return self._design.columns

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def warnings_for(self, column: str) -> tuple[str, ...]:
        """Warnings raised for one column, by label (V1.. when unnamed)."""
        return self._result.warnings_for(column)

    @property
    def flagged_columns(self) -> tuple[str, ...]:
        """Columns with at least one warning."""
        return self._result.flagged_columns

    def summary(self) -> str:
        """Table-style summary output."""
        lines = []

        if self.summary_table is not None:
            table = self.summary_table
            p = table.shape[1]
            cols = self._result.columns

            col_widths = []
            for j in range(p):
                width = max(
                    len(cols[j]),
                    max(len(f"{table[i, j]:.6f}") for i in range(6))
                )
                col_widths.append(width)

            label_width = max(len(lbl) for lbl in SUMMARY_ROWS)

            header = " " * (label_width + 2)
            header += "  ".join(c.rjust(w) for c, w in zip(cols, col_widths))
            lines.append(header)

            for i, label in enumerate(SUMMARY_ROWS):
                row = label.ljust(label_width) + "  "
                row += "  ".join(
                    f"{table[i, j]:.6f}".rjust(w) for j, w in enumerate(col_widths)
                )
                lines.append(row)
        elif self.mean is not None:
            cols = self._result.columns
            lines.append("Descriptive Statistics:")
            for j, col in enumerate(cols):
                parts = [f"  {col}:", f"mean={self.mean[j]:.6f}"]
                if self.sd is not None:
                    parts.append(f"sd={self.sd[j]:.6f}")
                lines.append(", ".join(parts))

        if self.warnings:
            lines.append("Warnings:")
            lines.extend(f"  {w}" for w in self.warnings)

        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._design.p
        n = self._design.n
        params = self._result.params
        computed = [
            name for name in (
                "mean", "variance", "sd", "skewness", "kurtosis",
                "quantiles", "summary_table",
            )
            if getattr(params, name) is not None
        ]
        stats_str = ", ".join(computed) if computed else "none"
        return f"DescriptiveSolution(n={n}, p={p}, computed=[{stats_str}])"
