"""Table entity: column schema plus row store.

A table owns an ordered schema of ColumnDefs and an ordered list of rows.
Each row holds exactly one value per column, and every value matches the
declared type of its column. The table is the single owner of its rows;
reads hand out copies, and writes go through ``set_value`` (or the typed
setters) so the invariant cannot be bypassed.

Lifecycle:
    OPEN ──release()──> RELEASED

Any call on a released table raises StateError, including a second
``release()``. Tables are context managers; leaving the ``with`` block
releases the table unless it was already released inside the block.

Addressing is zero-based for both rows and columns. Columns may be given
by ordinal or by name.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Iterator, Sequence

import structlog

from tabular_engine.domain.entities.column import ColumnDef
from tabular_engine.domain.exceptions import StateError, ValidationError
from tabular_engine.domain.value_objects import (
    ColumnConstraint,
    ColumnIndex,
    ColumnRef,
    ColumnType,
    RowPosition,
    TableState,
)

logger = structlog.get_logger(__name__)


class Table:
    """An in-memory table with a typed column schema.

    Thread Safety:
        None. A table assumes exclusive access for the duration of every
        call; callers sharing one across threads must lock externally.

    Usage:
        with Table("people") as people:
            people.add_column("ID", ColumnType.INTEGER)
            people.add_column("Name", ColumnType.TEXT)
            row = people.add_row()
            people.set_value("ID", row, 1)
            people.set_value("Name", row, "x")
    """

    def __init__(
        self,
        name: str = "table",
        on_release: Callable[[Table], None] | None = None,
    ) -> None:
        """Create an empty, open table.

        Args:
            name: Display name used in logs and traces.
            on_release: Called once with this table when it is released.
        """
        self._name = name
        self._columns: list[ColumnDef] = []
        self._by_name: dict[str, ColumnDef] = {}
        self._rows: list[list[Any]] = []
        self._state = TableState.OPEN
        self._on_release = on_release

    def __repr__(self) -> str:
        if self._state is TableState.RELEASED:
            return f"Table({self._name!r}, released)"
        return f"Table({self._name!r}, columns={len(self._columns)}, rows={len(self._rows)})"

    def __enter__(self) -> Table:
        self._ensure_open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._state is TableState.OPEN:
            self.release()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> TableState:
        return self._state

    @property
    def is_released(self) -> bool:
        return self._state is TableState.RELEASED

    def release(self) -> None:
        """Release the table's rows and schema.

        Raises:
            StateError: If the table was already released.
        """
        self._ensure_open()
        self._rows = []
        self._columns = []
        self._by_name = {}
        self._state = TableState.RELEASED
        logger.debug("table_released", table=self._name)
        if self._on_release is not None:
            self._on_release(self)

    def _ensure_open(self) -> None:
        if self._state is TableState.RELEASED:
            raise StateError(f"Table '{self._name}' has been released")

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    @property
    def columns(self) -> tuple[ColumnDef, ...]:
        """Schema in ordinal order."""
        self._ensure_open()
        return tuple(self._columns)

    @property
    def column_count(self) -> int:
        self._ensure_open()
        return len(self._columns)

    def add_column(
        self,
        name: str,
        column_type: ColumnType,
        description: str = "",
        constraint: ColumnConstraint = ColumnConstraint.NONE,
    ) -> ColumnIndex:
        """Append a column to the schema.

        Args:
            name: Unique, non-empty column name.
            column_type: Declared value type.
            description: Display text.
            constraint: Domain rule applied to every write.

        Returns:
            The new column's ordinal.

        Raises:
            StateError: If the table is released.
            ValidationError: If the name is empty or taken, the table already
                has rows, or the constraint does not fit the type.
        """
        self._ensure_open()
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Column name cannot be empty")
        if name in self._by_name:
            raise ValidationError(f"Column '{name}' already exists in table '{self._name}'")
        if self._rows:
            raise ValidationError(
                f"Cannot add column '{name}': table '{self._name}' already has rows"
            )
        if not constraint.applies_to(column_type):
            raise ValidationError(
                f"Constraint {constraint.value} cannot apply to {column_type.value} column '{name}'"
            )

        column = ColumnDef(
            name=name,
            type=column_type,
            ordinal=ColumnIndex(len(self._columns)),
            description=description,
            constraint=constraint,
        )
        self._columns.append(column)
        self._by_name[name] = column
        logger.debug(
            "column_added",
            table=self._name,
            column=name,
            column_type=column_type.value,
            ordinal=column.ordinal,
        )
        return column.ordinal

    def column(self, ref: ColumnRef) -> ColumnDef:
        """Resolve a column by ordinal or name.

        Raises:
            ValidationError: If no such column exists.
        """
        self._ensure_open()
        if isinstance(ref, str):
            column = self._by_name.get(ref)
            if column is None:
                raise ValidationError(f"Unknown column '{ref}' in table '{self._name}'")
            return column
        if isinstance(ref, bool) or not isinstance(ref, int):
            raise ValidationError(f"Column reference must be a name or index, got {ref!r}")
        if not 0 <= ref < len(self._columns):
            raise ValidationError(
                f"Column index {ref} out of range [0, {len(self._columns)}) "
                f"in table '{self._name}'"
            )
        return self._columns[ref]

    def column_index(self, ref: ColumnRef) -> ColumnIndex:
        return self.column(ref).ordinal

    def has_column(self, name: str) -> bool:
        self._ensure_open()
        return name in self._by_name

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    @property
    def row_count(self) -> int:
        self._ensure_open()
        return len(self._rows)

    def add_row(self) -> RowPosition:
        """Append a row holding each column's default value.

        Returns:
            Position of the new row.
        """
        self._ensure_open()
        self._rows.append([column.type.default_value() for column in self._columns])
        return RowPosition(len(self._rows) - 1)

    def _check_row(self, row: int) -> None:
        if isinstance(row, bool) or not isinstance(row, int):
            raise ValidationError(f"Row position must be an integer, got {row!r}")
        if not 0 <= row < len(self._rows):
            raise ValidationError(
                f"Row {row} out of range [0, {len(self._rows)}) in table '{self._name}'"
            )

    def get_value(self, column: ColumnRef, row: int) -> Any:
        """Read one cell.

        Raises:
            ValidationError: If the column is unknown or the row out of range.
        """
        col = self.column(column)
        self._check_row(row)
        return self._rows[row][col.ordinal]

    def set_value(self, column: ColumnRef, row: int, value: Any) -> None:
        """Write one cell, leaving every other cell untouched.

        Raises:
            ValidationError: If the column is unknown, the row out of range,
                or the value breaks the column's type or constraint.
        """
        col = self.column(column)
        self._check_row(row)
        col.validate(value)
        self._rows[row][col.ordinal] = value

    def validate_value(self, column: ColumnRef, value: Any) -> ColumnDef:
        """Check that ``value`` could be written to ``column`` without writing it.

        Returns:
            The resolved column definition.
        """
        col = self.column(column)
        col.validate(value)
        return col

    def row_values(self, row: int) -> list[Any]:
        """Copy of one row's values in schema order."""
        self._ensure_open()
        self._check_row(row)
        return list(self._rows[row])

    def iter_rows(self) -> Iterator[list[Any]]:
        """Iterate over copies of all rows in current order."""
        self._ensure_open()
        for values in self._rows:
            yield list(values)

    def column_values(self, column: ColumnRef) -> list[Any]:
        """All values of one column in current row order."""
        ordinal = self.column(column).ordinal
        return [values[ordinal] for values in self._rows]

    def reorder_rows(self, order: Sequence[int]) -> None:
        """Rearrange rows so that new position ``i`` holds old row ``order[i]``.

        Raises:
            ValidationError: If ``order`` is not a permutation of the current
                row positions.
        """
        self._ensure_open()
        if sorted(order) != list(range(len(self._rows))):
            raise ValidationError("Row order must be a permutation of current row positions")
        self._rows = [self._rows[i] for i in order]

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def _typed(self, column: ColumnRef, expected: ColumnType) -> ColumnDef:
        col = self.column(column)
        if col.type is not expected:
            raise ValidationError(
                f"Column '{col.name}' is {col.type.value}, not {expected.value}"
            )
        return col

    def get_int(self, column: ColumnRef, row: int) -> int:
        return self.get_value(self._typed(column, ColumnType.INTEGER).ordinal, row)

    def set_int(self, column: ColumnRef, row: int, value: int) -> None:
        self.set_value(self._typed(column, ColumnType.INTEGER).ordinal, row, value)

    def get_double(self, column: ColumnRef, row: int) -> float:
        return self.get_value(self._typed(column, ColumnType.DOUBLE).ordinal, row)

    def set_double(self, column: ColumnRef, row: int, value: float) -> None:
        self.set_value(self._typed(column, ColumnType.DOUBLE).ordinal, row, value)

    def get_text(self, column: ColumnRef, row: int) -> str:
        return self.get_value(self._typed(column, ColumnType.TEXT).ordinal, row)

    def set_text(self, column: ColumnRef, row: int, value: str) -> None:
        self.set_value(self._typed(column, ColumnType.TEXT).ordinal, row, value)

    def get_datetime(self, column: ColumnRef, row: int) -> datetime:
        return self.get_value(self._typed(column, ColumnType.DATETIME).ordinal, row)

    def set_datetime(self, column: ColumnRef, row: int, value: datetime) -> None:
        self.set_value(self._typed(column, ColumnType.DATETIME).ordinal, row, value)
