"""
In-place selection of order statistics (quickselect).

The engine works on any mutable indexable sequence: a Python list, a
1-D numpy array, or a 1-D view into a larger array. Ordering comes from
an injected strict "less than" comparator, so the same code serves
floats with NaN (total_less), fail-fast ordering (strict_less) or any
user-defined total order.

The buffer is permuted in place and is NOT restored. Callers that need
the original order must pass a copy. Every mutation is a swap, so the
buffer is always a permutation of its input, including when a
comparator raises part-way through.

Pivot rule: deterministic median-of-three over the first, middle and
last element of the active range. Partitioning is three-way (elements
less than, equal to, greater than the pivot), so runs of duplicates are
settled in one pass. Ranges of at most _INSERTION_SORT_THRESHOLD
elements are finished by insertion sort. Because the rule is
deterministic, the final arrangement of the buffer is reproducible for
a given input and comparator.

Complexity: O(n) average for one rank; O(n log m) average for m ranks
with select_many, which shares every partition step between ranks.
"""

from __future__ import annotations

import operator
from bisect import bisect_left, bisect_right
from typing import Any, Iterable, MutableSequence

from ndstats.core.exceptions import EmptyInputError
from ndstats.order.total_order import Less, total_less

_INSERTION_SORT_THRESHOLD = 16


def partition(
    buffer: MutableSequence[Any],
    lo: int,
    hi: int,
    pivot_index: int,
    less: Less = total_less,
) -> tuple[int, int]:
    """
    Three-way partition of buffer[lo:hi + 1] around buffer[pivot_index].

    After the call:
        buffer[lo:lt]       < pivot
        buffer[lt:gt + 1]  == pivot
        buffer[gt + 1:hi + 1] > pivot

    Args:
        buffer: Sequence to rearrange in place
        lo, hi: Inclusive bounds of the range to partition
        pivot_index: Index in [lo, hi] of the pivot element
        less: Strict ordering comparator

    Returns:
        (lt, gt), the inclusive bounds of the run equal to the pivot
    """
    pivot = buffer[pivot_index]
    lt, i, gt = lo, lo, hi
    while i <= gt:
        item = buffer[i]
        if less(item, pivot):
            buffer[lt], buffer[i] = buffer[i], buffer[lt]
            lt += 1
            i += 1
        elif less(pivot, item):
            buffer[i], buffer[gt] = buffer[gt], buffer[i]
            gt -= 1
        else:
            i += 1
    return lt, gt


def _median_of_three(buffer: MutableSequence[Any], lo: int, hi: int, less: Less) -> int:
    mid = lo + (hi - lo) // 2
    a, b, c = buffer[lo], buffer[mid], buffer[hi]
    if less(a, b):
        if less(b, c):
            return mid
        return hi if less(a, c) else lo
    if less(a, c):
        return lo
    return hi if less(b, c) else mid


def _insertion_sort(buffer: MutableSequence[Any], lo: int, hi: int, less: Less) -> None:
    for i in range(lo + 1, hi + 1):
        j = i
        while j > lo and less(buffer[j], buffer[j - 1]):
            buffer[j], buffer[j - 1] = buffer[j - 1], buffer[j]
            j -= 1


def _move_extreme(
    buffer: MutableSequence[Any], lo: int, hi: int, less: Less, *, to_front: bool
) -> None:
    """Swap the minimum (to_front) or maximum (not to_front) of a range into place."""
    best = lo
    for i in range(lo + 1, hi + 1):
        if to_front and less(buffer[i], buffer[best]):
            best = i
        elif not to_front and less(buffer[best], buffer[i]):
            best = i
    target = lo if to_front else hi
    if best != target:
        buffer[target], buffer[best] = buffer[best], buffer[target]


def _select_range(
    buffer: MutableSequence[Any], lo: int, hi: int, k: int, less: Less
) -> None:
    while lo < hi:
        if k == lo:
            _move_extreme(buffer, lo, hi, less, to_front=True)
            return
        if k == hi:
            _move_extreme(buffer, lo, hi, less, to_front=False)
            return
        if hi - lo < _INSERTION_SORT_THRESHOLD:
            _insertion_sort(buffer, lo, hi, less)
            return

        pivot_index = _median_of_three(buffer, lo, hi, less)
        lt, gt = partition(buffer, lo, hi, pivot_index, less)
        if k < lt:
            hi = lt - 1
        elif k > gt:
            lo = gt + 1
        else:
            return


def _check_rank(k: Any, n: int) -> int:
    k = operator.index(k)
    if not 0 <= k < n:
        raise IndexError(f"rank {k} out of range for buffer of length {n}")
    return k


def select_nth(
    buffer: MutableSequence[Any],
    k: int,
    *,
    less: Less = total_less,
) -> Any:
    """
    Return the k-th smallest element (0-indexed), partitioning buffer in place.

    After the call, buffer[k] holds the value it would hold if buffer
    were sorted, every element before k is <= buffer[k] and every
    element after k is >= buffer[k]. No other ordering is implied.

    Args:
        buffer: Mutable sequence, rearranged in place
        k: Target rank in [0, len(buffer))
        less: Strict ordering comparator (default: NaN sorts last)

    Returns:
        buffer[k] after partitioning

    Raises:
        EmptyInputError: If buffer is empty
        IndexError: If k is outside [0, len(buffer))
    """
    n = len(buffer)
    if n == 0:
        raise EmptyInputError("select_nth: buffer is empty", name="buffer")
    k = _check_rank(k, n)
    _select_range(buffer, 0, n - 1, k, less)
    return buffer[k]


def select_many(
    buffer: MutableSequence[Any],
    ranks: Iterable[int],
    *,
    less: Less = total_less,
) -> list[Any]:
    """
    Select several order statistics in one shared partitioning pass.

    Each partition step splits the pending ranks between its left and
    right sub-ranges, so work done for one rank is reused by the others.
    Afterwards every requested rank satisfies the select_nth invariant.

    Args:
        buffer: Mutable sequence, rearranged in place
        ranks: Target ranks, in any order, duplicates allowed
        less: Strict ordering comparator

    Returns:
        Values at the requested ranks, in the order the ranks were given

    Raises:
        EmptyInputError: If buffer is empty
        IndexError: If any rank is outside [0, len(buffer))
    """
    n = len(buffer)
    if n == 0:
        raise EmptyInputError("select_many: buffer is empty", name="buffer")
    requested = [_check_rank(k, n) for k in ranks]
    if not requested:
        return []

    pending = [(0, n - 1, sorted(set(requested)))]
    while pending:
        lo, hi, targets = pending.pop()
        if len(targets) == 1:
            _select_range(buffer, lo, hi, targets[0], less)
            continue
        if hi - lo < _INSERTION_SORT_THRESHOLD:
            _insertion_sort(buffer, lo, hi, less)
            continue

        pivot_index = _median_of_three(buffer, lo, hi, less)
        lt, gt = partition(buffer, lo, hi, pivot_index, less)
        left = targets[:bisect_left(targets, lt)]
        right = targets[bisect_right(targets, gt):]
        if left:
            pending.append((lo, lt - 1, left))
        if right:
            pending.append((gt + 1, hi, right))

    return [buffer[k] for k in requested]
