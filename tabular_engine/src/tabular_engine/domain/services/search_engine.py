"""First-match lookup within a column."""

from __future__ import annotations

from typing import Any

import structlog

from tabular_engine.domain.entities.table import Table
from tabular_engine.domain.value_objects import NOT_FOUND, ColumnRef, RowPosition

logger = structlog.get_logger(__name__)


def find_first(table: Table, column: ColumnRef, target: Any) -> RowPosition:
    """Find the first row, in current order, whose value in ``column`` equals ``target``.

    No sort is performed and sortedness is not checked. Sort the table by
    ``column`` first to get first-in-group semantics; on an unsorted table
    the result is simply the earliest match in the current order.

    A target whose runtime type does not match the column never matches.

    Args:
        table: Table to search.
        column: Column name or ordinal.
        target: Value to look for.

    Returns:
        Position of the matching row, or NOT_FOUND.

    Raises:
        ValidationError: If the column does not exist.
    """
    col = table.column(column)
    if not col.type.accepts(target):
        logger.debug(
            "lookup_type_mismatch",
            table=table.name,
            column=col.name,
            target_type=type(target).__name__,
        )
        return NOT_FOUND

    for position, value in enumerate(table.column_values(col.ordinal)):
        if value == target:
            return RowPosition(position)
    return NOT_FOUND
