"""Column definition entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tabular_engine.domain.exceptions import ValidationError
from tabular_engine.domain.value_objects import ColumnConstraint, ColumnIndex, ColumnType
from tabular_engine.domain.value_objects.column_types import is_aware


@dataclass(frozen=True, slots=True)
class ColumnDef:
    """A named, typed slot present in every row of a table.

    Attributes:
        name: Unique, non-empty column name
        type: Declared value type
        ordinal: Zero-based position in the schema
        description: Display text, carries no semantics
        constraint: Domain rule enforced on every write

    Example:
        >>> col = ColumnDef("Quantity", ColumnType.INTEGER, ColumnIndex(3),
        ...                 "Quantity in Stock", ColumnConstraint.NON_NEGATIVE)
        >>> col.validate(-1)
        Traceback (most recent call last):
        ...
        ValidationError: Column 'Quantity': value -1 must not be negative
    """

    name: str
    type: ColumnType
    ordinal: ColumnIndex
    description: str = ""
    constraint: ColumnConstraint = ColumnConstraint.NONE

    def validate(self, value: Any) -> None:
        """Check a value against this column's type and domain rule.

        Raises:
            ValidationError: If the value has the wrong runtime type, is a
                timezone-aware datetime, or violates the column constraint.
        """
        if self.type is ColumnType.DATETIME and is_aware(value):
            raise ValidationError(
                f"Column '{self.name}' expects a naive datetime, got {value.isoformat()}"
            )
        if not self.type.accepts(value):
            raise ValidationError(
                f"Column '{self.name}' expects {self.type.value}, "
                f"got {type(value).__name__}"
            )
        problem = self.constraint.violation(value)
        if problem is not None:
            raise ValidationError(f"Column '{self.name}': {problem}")
