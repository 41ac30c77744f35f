"""Validated cell updates addressed by key or by row position.

Both operations validate everything before they write, so a raised error
always leaves the table as it was. A key that matches no row is reported
through ``UpdateOutcome.NOT_FOUND`` rather than an exception.
"""

from __future__ import annotations

from typing import Any

import structlog

from tabular_engine.domain.entities.table import Table
from tabular_engine.domain.exceptions import StateError, ValidationError
from tabular_engine.domain.services.search_engine import find_first
from tabular_engine.domain.services.sort_engine import sort_by_column
from tabular_engine.domain.value_objects import NOT_FOUND, ColumnRef, UpdateOutcome

logger = structlog.get_logger(__name__)


def _ensure_has_rows(table: Table) -> None:
    if table.row_count == 0:
        raise StateError(f"Table '{table.name}' is empty")


def update_by_key(
    table: Table,
    key_column: ColumnRef,
    key_value: Any,
    target_column: ColumnRef,
    new_value: Any,
) -> UpdateOutcome:
    """Set ``target_column`` on the first row whose ``key_column`` equals ``key_value``.

    The table is sorted by ``key_column`` before the lookup, so "first" means
    first in the key's group. That sort happens even when no row matches;
    cell values are only written on a match.

    Args:
        table: Table to update.
        key_column: Column holding the lookup key.
        key_value: Key to match.
        target_column: Column whose cell is overwritten.
        new_value: Value to write.

    Returns:
        UPDATED when a row matched, NOT_FOUND otherwise.

    Raises:
        StateError: If the table has no rows or has been released.
        ValidationError: If either column is unknown or ``new_value`` breaks
            the target column's type or domain rule.
    """
    _ensure_has_rows(table)
    key = table.column(key_column)
    target = table.validate_value(target_column, new_value)

    sort_by_column(table, key.ordinal)
    row = find_first(table, key.ordinal, key_value)

    if row == NOT_FOUND:
        logger.info(
            "update_key_not_found",
            table=table.name,
            key_column=key.name,
            key=key_value,
        )
        return UpdateOutcome.NOT_FOUND

    table.set_value(target.ordinal, row, new_value)
    logger.info(
        "cell_updated_by_key",
        table=table.name,
        key_column=key.name,
        key=key_value,
        column=target.name,
        value=new_value,
    )
    return UpdateOutcome.UPDATED


def update_by_position(
    table: Table,
    row: int,
    target_column: ColumnRef,
    new_value: Any,
) -> None:
    """Set ``target_column`` on the row at ``row``.

    Args:
        table: Table to update.
        row: Zero-based row position in the current order.
        target_column: Column whose cell is overwritten.
        new_value: Value to write.

    Raises:
        StateError: If the table has no rows or has been released.
        ValidationError: If ``row`` is outside ``[0, row_count)``, the column
            is unknown, or ``new_value`` breaks the column's rules.
    """
    _ensure_has_rows(table)
    if isinstance(row, bool) or not isinstance(row, int) or not 0 <= row < table.row_count:
        raise ValidationError(f"Row number {row} is invalid")
    target = table.validate_value(target_column, new_value)

    table.set_value(target.ordinal, row, new_value)
    logger.info(
        "cell_updated_by_position",
        table=table.name,
        row=row,
        column=target.name,
        value=new_value,
    )
