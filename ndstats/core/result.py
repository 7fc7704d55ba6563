"""
Result envelope for column-wise computations.

A column-wise solver (describe(), summary()) fills one payload of
per-column arrays and, along the way, notes which columns produced
undefined statistics. Those notes are kept as ColumnWarning records
rather than free text so callers can ask about one column.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

P = TypeVar('P')


@dataclass(frozen=True)
class ColumnWarning:
    """A non-fatal condition met while processing one column."""
    column: str
    message: str

    def __str__(self) -> str:
        return f"{self.column}: {self.message}"


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable envelope around a per-column payload.

    Attributes:
        params: Payload of per-column statistics
        columns: Column labels, in payload order
        info: Options the solver ran with (interpolate, skipnan, ...)
        timing: Seconds per section plus 'total_seconds', or None
        notes: ColumnWarning records in the order they were raised
    """
    params: P
    columns: tuple[str, ...]
    info: dict[str, Any]
    timing: dict[str, float] | None = None
    notes: tuple[ColumnWarning, ...] = field(default_factory=tuple)

    def __post_init__(self):
        unknown = {note.column for note in self.notes} - set(self.columns)
        if unknown:
            raise ValueError(f"warnings refer to unknown columns: {sorted(unknown)}")

    @property
    def warnings(self) -> tuple[str, ...]:
        """Notes rendered as 'column: message' strings."""
        return tuple(str(note) for note in self.notes)

    def warnings_for(self, column: str) -> tuple[str, ...]:
        """Messages raised for one column."""
        return tuple(note.message for note in self.notes if note.column == column)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    @property
    def flagged_columns(self) -> tuple[str, ...]:
        """Columns with at least one note, in column order."""
        flagged = {note.column for note in self.notes}
        return tuple(c for c in self.columns if c in flagged)
