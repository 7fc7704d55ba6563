"""
Exception hierarchy for ndstats.

All exceptions inherit from NdStatsError to allow catching any
library-specific error. Domain modules raise the most specific class
that applies.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information

Requesting a rank outside the buffer is a programming error and raises
the builtin IndexError, not a member of this hierarchy.
"""

from __future__ import annotations

from typing import Any


class NdStatsError(Exception):
    """Base exception for all ndstats errors."""
    pass


class ValidationError(NdStatsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, when an
    axis does not exist, or when multiple arrays have inconsistent shapes.
    """
    pass


class EmptyInputError(ValidationError):
    """
    A statistic was requested on zero-length data.

    Attributes:
        name: Name of the empty input (parameter name or 'axis 1', etc.)
    """

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class InvalidQuantileError(ValidationError):
    """
    Quantile outside [0, 1] or NaN.

    Attributes:
        q: The rejected quantile value
    """

    def __init__(self, message: str, q: float | None = None):
        super().__init__(message)
        self.q = q


class DimensionMismatchError(DimensionError):
    """
    Dimensionality of two objects disagrees.

    Raised when a point does not have one coordinate per grid dimension,
    or when two arrays that must be co-indexed have different shapes.

    Attributes:
        expected: Expected dimensionality or shape
        actual: Dimensionality or shape that was supplied
    """

    def __init__(self, message: str, expected: Any = None, actual: Any = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NumericalError(NdStatsError):
    """
    Numerical computation failed.

    Base class for errors arising from the values in the data rather
    than from the shape or type of the inputs.
    """
    pass


class DegenerateSampleError(NumericalError):
    """
    Sample has zero range or zero spread where a positive bin width is required.

    Attributes:
        strategy: Name of the binning rule that produced the zero width
        value_range: (min, max) of the sample
    """

    def __init__(
        self,
        message: str,
        strategy: str | None = None,
        value_range: tuple[float, float] | None = None,
    ):
        super().__init__(message)
        self.strategy = strategy
        self.value_range = value_range


class UndefinedOrderError(NumericalError):
    """
    A value without a defined order (NaN) was met under a strict order.

    Attributes:
        value: The incomparable value
    """

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class OutOfRangeError(NdStatsError):
    """
    Point lies outside the range covered by a grid.

    Recoverable: callers decide whether to drop or clamp the point.
    Histogram drops such points and counts them.

    Attributes:
        point: The offending point
        axis: First axis on which the coordinate is out of range
    """

    def __init__(self, message: str, point: Any = None, axis: int | None = None):
        super().__init__(message)
        self.point = point
        self.axis = axis
