"""Projection merge of two tables.

Builds a new table from exactly five columns of each source table:

    [prefix_a + A.sel_a[0], ..., prefix_a + A.sel_a[4],
     prefix_b + B.sel_b[0], ..., prefix_b + B.sel_b[4]]

Rows are aligned by position in each source's current order (no implicit
sort) up to ``min(A.row_count, B.row_count)``. Rows past that point in the
longer source are dropped.

Every cell goes through ``copy_cell``, which picks the typed getter/setter
pair from the source column's declared type. The sources are only read;
they are neither mutated nor released, and the caller owns all three
tables afterwards.
"""

from __future__ import annotations

from typing import Callable, Sequence

import structlog

from tabular_engine.domain.entities.column import ColumnDef
from tabular_engine.domain.entities.table import Table
from tabular_engine.domain.exceptions import TableError, ValidationError
from tabular_engine.domain.value_objects import ColumnType

logger = structlog.get_logger(__name__)

SELECTION_WIDTH = 5
DEFAULT_PREFIX_A = "CustomerProfile_"
DEFAULT_PREFIX_B = "CustomerTransactions_"


def copy_cell(
    source: Table,
    src_col: int,
    src_row: int,
    target: Table,
    tgt_col: int,
    tgt_row: int,
) -> None:
    """Copy one cell, choosing the copy path from the source column's type."""
    column_type = source.column(src_col).type

    if column_type is ColumnType.INTEGER:
        target.set_int(tgt_col, tgt_row, source.get_int(src_col, src_row))
    elif column_type is ColumnType.DOUBLE:
        target.set_double(tgt_col, tgt_row, source.get_double(src_col, src_row))
    elif column_type is ColumnType.TEXT:
        target.set_text(tgt_col, tgt_row, source.get_text(src_col, src_row))
    elif column_type is ColumnType.DATETIME:
        target.set_datetime(tgt_col, tgt_row, source.get_datetime(src_col, src_row))
    else:
        raise TableError(f"No copy path for column type {column_type}")


def _validate_source(table: Table | None, label: str) -> None:
    if table is None:
        raise ValidationError("Tables cannot be null.")
    if table.is_released:
        raise ValidationError(f"Table {label} '{table.name}' has been released")


def _validate_selection(
    table: Table, selection: Sequence[int] | None, label: str, width: int
) -> None:
    if selection is None:
        raise ValidationError("Column arrays cannot be null.")
    if len(selection) != width:
        raise ValidationError(f"You must select exactly {width} columns from each table.")
    column_count = table.column_count
    for index in selection:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < column_count:
            raise ValidationError(f"Column index {label} out of range: {index}")


def validate_parameters(
    table_a: Table | None,
    table_b: Table | None,
    select_a: Sequence[int] | None,
    select_b: Sequence[int] | None,
    selection_width: int = SELECTION_WIDTH,
) -> None:
    """Check merge inputs without building anything.

    Raises:
        ValidationError: If a table is None or released, a selection is None
            or not exactly ``selection_width`` entries long, or an index is out of range.
    """
    _validate_source(table_a, "A")
    _validate_source(table_b, "B")
    _validate_selection(table_a, select_a, "A", selection_width)
    _validate_selection(table_b, select_b, "B", selection_width)


def plan_columns(
    table_a: Table,
    table_b: Table,
    select_a: Sequence[int],
    select_b: Sequence[int],
    prefix_a: str,
    prefix_b: str,
) -> list[tuple[Table, ColumnDef, str]]:
    """Source table, source column and output name for each output column.

    Raises:
        ValidationError: If two output columns would share a name.
    """
    plan = [(table_a, table_a.column(i), prefix_a + table_a.column(i).name) for i in select_a]
    plan += [(table_b, table_b.column(i), prefix_b + table_b.column(i).name) for i in select_b]

    seen: set[str] = set()
    for _, _, name in plan:
        if name in seen:
            raise ValidationError(f"Merged column name '{name}' is selected more than once")
        seen.add(name)
    return plan


def merge_tables(
    table_a: Table | None,
    table_b: Table | None,
    select_a: Sequence[int] | None,
    select_b: Sequence[int] | None,
    prefix_a: str = DEFAULT_PREFIX_A,
    prefix_b: str = DEFAULT_PREFIX_B,
    table_factory: Callable[[str], Table] = Table,
    name: str = "merged",
    selection_width: int = SELECTION_WIDTH,
) -> Table:
    """Merge five selected columns from each of two tables into a new table.

    Args:
        table_a: First source table.
        table_b: Second source table.
        select_a: Five zero-based column indices into ``table_a``.
        select_b: Five zero-based column indices into ``table_b``.
        prefix_a: Prepended to the names of columns taken from ``table_a``.
        prefix_b: Prepended to the names of columns taken from ``table_b``.
        table_factory: Creates the output table from a name.
        name: Name of the output table.
        selection_width: Number of columns each selection must hold.

    Returns:
        A new, fully populated table with ``2 * selection_width`` columns.

    Raises:
        ValidationError: If the inputs are invalid. No output table is
            produced in that case.
    """
    validate_parameters(table_a, table_b, select_a, select_b, selection_width)
    plan = plan_columns(table_a, table_b, select_a, select_b, prefix_a, prefix_b)

    merged = table_factory(name)
    try:
        for _, column, column_name in plan:
            merged.add_column(column_name, column.type, column.description, column.constraint)

        num_rows = min(table_a.row_count, table_b.row_count)
        for row in range(num_rows):
            new_row = merged.add_row()
            for target_col, (source, column, _) in enumerate(plan):
                copy_cell(source, column.ordinal, row, merged, target_col, new_row)
    except TableError:
        merged.release()
        raise

    logger.info(
        "tables_merged",
        table_a=table_a.name,
        table_b=table_b.name,
        merged=merged.name,
        rows=num_rows,
        dropped_a=table_a.row_count - num_rows,
        dropped_b=table_b.row_count - num_rows,
    )
    return merged
