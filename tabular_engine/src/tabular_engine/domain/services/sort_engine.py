"""Stable single-column sort.

Rows are reordered into non-decreasing order of one column using the
natural ordering of its type: numeric for INTEGER and DOUBLE, code-point
lexicographic for TEXT, chronological for DATETIME. Rows with equal keys
keep their relative order (Python's sort is stable), and the whole
operation is O(n log n).

NaN in a DOUBLE column has no natural position; it sorts after every
number so that the ordering stays total.

Sorting changes every row's position. Positions captured before a sort
must not be reused after it.
"""

from __future__ import annotations

import math
from typing import Any, Callable

import structlog

from tabular_engine.domain.entities.table import Table
from tabular_engine.domain.value_objects import ColumnRef, ColumnType

logger = structlog.get_logger(__name__)


def _double_key(value: float) -> tuple[bool, float]:
    if math.isnan(value):
        return (True, 0.0)
    return (False, value)


def _identity_key(value: Any) -> Any:
    return value


def sort_key_for(column_type: ColumnType) -> Callable[[Any], Any]:
    """Key function giving the natural ordering of a column type."""
    if column_type is ColumnType.DOUBLE:
        return _double_key
    return _identity_key


def sort_by_column(table: Table, column: ColumnRef) -> None:
    """Sort the table's rows in place by one column.

    Args:
        table: Table to reorder.
        column: Column name or ordinal to sort by.

    Raises:
        ValidationError: If the column does not exist.
        StateError: If the table has been released.
    """
    col = table.column(column)
    values = table.column_values(col.ordinal)
    key = sort_key_for(col.type)

    order = sorted(range(len(values)), key=lambda i: key(values[i]))
    table.reorder_rows(order)

    logger.debug("table_sorted", table=table.name, column=col.name, rows=len(order))
