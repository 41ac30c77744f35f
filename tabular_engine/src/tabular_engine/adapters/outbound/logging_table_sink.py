"""Structured-log table sink adapter.

Implements TableSink by emitting one structlog event for the schema and
one per row, each row carrying a cells mapping keyed by column name.
With the console renderer this reads as a table dump; with the JSON
renderer it yields one record per row.
"""

from __future__ import annotations

import structlog

from tabular_engine.domain.entities import Table
from tabular_engine.infrastructure.logging import encode_cell


class LoggingTableSink:
    """TableSink that writes a table's contents to a structlog logger."""

    def __init__(self, logger: structlog.BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger(__name__)

    def render(self, table: Table, title: str | None = None) -> None:
        """Log the schema, then each row in current order."""
        heading = title or table.name
        columns = table.columns
        self._logger.info(
            "table_view",
            table=heading,
            columns=[column.name for column in columns],
            descriptions=[column.description for column in columns],
            rows=table.row_count,
        )
        for position, values in enumerate(table.iter_rows()):
            cells = {column.name: encode_cell(value) for column, value in zip(columns, values)}
            self._logger.info("table_row", table=heading, row=position, cells=cells)
