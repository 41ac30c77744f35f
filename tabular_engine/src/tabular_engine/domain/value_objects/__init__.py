"""Value objects for the tabular engine domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Identifiers:
        - RowPosition: Zero-based row position (invalidated by sort)
        - ColumnIndex: Zero-based column ordinal
        - ColumnRef: Column addressed by ordinal or name
        - NOT_FOUND: Sentinel returned by lookups that match nothing
        - UpdateOutcome: UPDATED or NOT_FOUND result of key updates
        - TableState: OPEN / RELEASED lifecycle

    Column Types:
        - ColumnType: INTEGER, DOUBLE, TEXT, DATETIME
        - ColumnConstraint: Per-column domain rules (NON_NEGATIVE)
"""

from tabular_engine.domain.value_objects.column_types import (
    DATETIME_DEFAULT,
    ColumnConstraint,
    ColumnType,
)
from tabular_engine.domain.value_objects.identifiers import (
    NOT_FOUND,
    ColumnIndex,
    ColumnRef,
    RowPosition,
    TableState,
    UpdateOutcome,
)

__all__ = [
    # Identifiers
    "RowPosition",
    "ColumnIndex",
    "ColumnRef",
    "NOT_FOUND",
    "UpdateOutcome",
    "TableState",
    # Column types
    "ColumnType",
    "ColumnConstraint",
    "DATETIME_DEFAULT",
]
