"""Outbound port for table display sinks.

A sink renders a table's current contents for human inspection. It reads
the schema and rows and produces nothing the engine consumes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tabular_engine.domain.entities import Table


@runtime_checkable
class TableSink(Protocol):
    """Protocol for table display sinks."""

    def render(self, table: Table, title: str | None = None) -> None:
        """Render the table's schema and rows in current order.

        Args:
            table: Open table to render. Must not be mutated.
            title: Optional heading, defaults to the table name.
        """
        ...
