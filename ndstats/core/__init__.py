"""
Core infrastructure for ndstats.

This module provides shared abstractions and utilities used by all
domain-specific submodules (order, quantile, histogram, descriptive).

Key components:
    result: Result[P] envelope and ColumnWarning
    exceptions: Exception hierarchy
    validation: Input validators
"""

from ndstats.core.result import ColumnWarning, Result
from ndstats.core.exceptions import (
    NdStatsError,
    ValidationError,
    DimensionError,
    EmptyInputError,
    InvalidQuantileError,
    DimensionMismatchError,
    NumericalError,
    DegenerateSampleError,
    UndefinedOrderError,
    OutOfRangeError,
)

__all__ = [
    # Result
    "Result",
    "ColumnWarning",
    # Exceptions
    "NdStatsError",
    "ValidationError",
    "DimensionError",
    "EmptyInputError",
    "InvalidQuantileError",
    "DimensionMismatchError",
    "NumericalError",
    "DegenerateSampleError",
    "UndefinedOrderError",
    "OutOfRangeError",
]
