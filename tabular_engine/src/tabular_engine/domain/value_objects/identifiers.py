"""Positional identifiers for table addressing.

Rows and columns are addressed by zero-based position. A row position is
not a stable identity: sorting a table reorders its rows, so any position
captured before a sort must not be reused afterwards.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import NewType, Union

RowPosition = NewType("RowPosition", int)
"""Zero-based index of a row in the table's current ordering."""

ColumnIndex = NewType("ColumnIndex", int)
"""Zero-based ordinal of a column in the table schema."""

ColumnRef = Union[ColumnIndex, str]
"""A column addressed either by ordinal or by name."""

# Returned by lookups that match nothing; never a valid row position.
NOT_FOUND = RowPosition(-1)


class UpdateOutcome(Enum):
    """Non-error result of a key-addressed update."""

    UPDATED = auto()
    """Exactly one cell was written."""

    NOT_FOUND = auto()
    """No row matched the key. The table is unchanged."""

    @property
    def found(self) -> bool:
        return self is UpdateOutcome.UPDATED


class TableState(Enum):
    """Lifecycle states of a table handle."""

    OPEN = auto()
    RELEASED = auto()
