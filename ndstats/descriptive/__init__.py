"""
Descriptive statistics module.

Public API:
    describe(data, ...)  - Comprehensive column-wise statistics
    summary(x, ...)      - Six-number summary (Min, Q1, Median, Mean, Q3, Max)

Reductions along an axis live in the moments, deviation, correlation
and entropy submodules and are re-exported here.
"""

from ndstats.descriptive.design import DescriptiveDesign
from ndstats.descriptive.solution import DescriptiveParams, DescriptiveSolution
from ndstats.descriptive.solvers import describe, summary
from ndstats.descriptive.moments import (
    central_moment,
    central_moments,
    geometric_mean,
    harmonic_mean,
    kurtosis,
    mean,
    skewness,
    weighted_mean,
    weighted_sum,
)
from ndstats.descriptive.deviation import (
    count_eq,
    count_neq,
    l1_dist,
    l2_dist,
    linf_dist,
    mean_abs_err,
    mean_sq_err,
    peak_signal_to_noise_ratio,
    root_mean_sq_err,
    sq_l2_dist,
)
from ndstats.descriptive.correlation import cov, pearson_correlation
from ndstats.descriptive.entropy import cross_entropy, entropy, kl_divergence

__all__ = [
    "describe",
    "summary",
    "DescriptiveDesign",
    "DescriptiveParams",
    "DescriptiveSolution",
    # moments
    "mean",
    "weighted_sum",
    "weighted_mean",
    "harmonic_mean",
    "geometric_mean",
    "central_moment",
    "central_moments",
    "skewness",
    "kurtosis",
    # deviation
    "count_eq",
    "count_neq",
    "sq_l2_dist",
    "l2_dist",
    "l1_dist",
    "linf_dist",
    "mean_abs_err",
    "mean_sq_err",
    "root_mean_sq_err",
    "peak_signal_to_noise_ratio",
    # correlation
    "cov",
    "pearson_correlation",
    # entropy
    "entropy",
    "kl_divergence",
    "cross_entropy",
]
