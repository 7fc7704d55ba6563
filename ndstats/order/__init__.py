"""
Ordering primitives.

Public API:
    total_less, strict_less  - Comparators (NaN sorts last / NaN raises)
    OrderedValue             - Wrapper giving a value the total order
    select_nth(buf, k)       - In-place quickselect of one rank
    select_many(buf, ranks)  - In-place selection of several ranks at once
    partition(buf, ...)      - Three-way partition step
"""

from ndstats.order.total_order import (
    Less,
    OrderedValue,
    is_nan,
    strict_less,
    total_less,
)
from ndstats.order.selection import partition, select_many, select_nth

__all__ = [
    "Less",
    "OrderedValue",
    "is_nan",
    "strict_less",
    "total_less",
    "partition",
    "select_many",
    "select_nth",
]
