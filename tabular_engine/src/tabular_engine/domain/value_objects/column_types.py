"""Column types and per-column domain rules.

The type set is closed. Each type knows its Python runtime type, the
default value given to freshly added rows, and how to check a candidate
value. ``bool`` is rejected for INTEGER and DOUBLE even though it is an
``int`` subclass. DATETIME holds naive datetimes only, matching the naive
default, so every pair of values in a column stays comparable.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

DATETIME_DEFAULT = datetime(1970, 1, 1)


def is_aware(value: Any) -> bool:
    """True for a datetime carrying a UTC offset."""
    return isinstance(value, datetime) and value.utcoffset() is not None


class ColumnType(Enum):
    """Supported column types."""

    INTEGER = "integer"
    DOUBLE = "double"
    TEXT = "text"
    DATETIME = "datetime"

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]

    @property
    def is_numeric(self) -> bool:
        return self in (ColumnType.INTEGER, ColumnType.DOUBLE)

    def default_value(self) -> Any:
        """Value stored in this column for a row that was just added."""
        return _DEFAULTS[self]

    def accepts(self, value: Any) -> bool:
        """Check whether ``value`` has this column type's runtime type."""
        if isinstance(value, bool):
            return False
        if self is ColumnType.DATETIME and is_aware(value):
            return False
        return isinstance(value, self.python_type)


_PYTHON_TYPES: dict[ColumnType, type] = {
    ColumnType.INTEGER: int,
    ColumnType.DOUBLE: float,
    ColumnType.TEXT: str,
    ColumnType.DATETIME: datetime,
}

_DEFAULTS: dict[ColumnType, Any] = {
    ColumnType.INTEGER: 0,
    ColumnType.DOUBLE: 0.0,
    ColumnType.TEXT: "",
    ColumnType.DATETIME: DATETIME_DEFAULT,
}


class ColumnConstraint(Enum):
    """Domain rule applied to every value written to a column."""

    NONE = "none"
    """Any value of the column's type."""

    NON_NEGATIVE = "non_negative"
    """Numeric columns only. Rejects values below zero (quantities, prices)."""

    def applies_to(self, column_type: ColumnType) -> bool:
        """Check whether this rule can be declared on a column of the given type."""
        if self is ColumnConstraint.NON_NEGATIVE:
            return column_type.is_numeric
        return True

    def violation(self, value: Any) -> str | None:
        """Describe why ``value`` breaks this rule, or None when it satisfies it."""
        if self is ColumnConstraint.NON_NEGATIVE and value < 0:
            return f"value {value!r} must not be negative"
        return None
