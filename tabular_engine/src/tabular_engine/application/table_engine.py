"""Table Engine - unified entry point for table operations.

The TableEngine owns the tables it creates and wraps the domain services
with metrics and tracing. Tables handed out by the engine are ordinary
Table objects; releasing one directly is seen by the engine, and closing
the engine releases every table still open.

Usage:
    from tabular_engine.application import TableEngine

    with TableEngine() as engine:
        customers = engine.create_table("profiles")
        ...
        merged = engine.merge_tables(customers, orders, [0, 1, 2, 3, 4], [0, 1, 2, 3, 4])
"""

from __future__ import annotations

from typing import Any, Sequence

import structlog

from tabular_engine.application.inventory import InventoryManager
from tabular_engine.domain.entities import Table
from tabular_engine.domain.exceptions import StateError, TableError
from tabular_engine.domain.services import (
    find_first,
    merge_tables,
    sort_by_column,
    update_by_key,
    update_by_position,
)
from tabular_engine.domain.value_objects import NOT_FOUND, ColumnRef, RowPosition, UpdateOutcome
from tabular_engine.infrastructure.config import Config, get_config
from tabular_engine.infrastructure.metrics import MetricsRegistry, get_metrics
from tabular_engine.infrastructure.tracing import table_span

logger = structlog.get_logger(__name__)


class TableEngine:
    """Owns tables and runs table operations with observability.

    Thread Safety:
        None. The engine and its tables are single-threaded.
    """

    def __init__(
        self,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Engine configuration. Uses the global config if None.
            metrics: Metrics registry. Uses the process default if None.
        """
        self._config = config or get_config()
        self._metrics = metrics or get_metrics()
        self._tables: dict[int, Table] = {}
        self._closed = False

    def __enter__(self) -> TableEngine:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if not self._closed:
            self.close()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def metrics(self) -> MetricsRegistry:
        return self._metrics

    @property
    def open_tables(self) -> list[Table]:
        """Tables created by this engine and not yet released."""
        return list(self._tables.values())

    def _ensure_running(self) -> None:
        if self._closed:
            raise StateError("Table engine has been closed")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_table(self, name: str = "table") -> Table:
        """Create an empty table owned by this engine."""
        self._ensure_running()
        table = Table(name, on_release=self._on_release)
        self._tables[id(table)] = table
        self._metrics.tables_created_total.inc()
        self._metrics.tables_open.inc()
        logger.debug("table_created", table=name)
        return table

    def _on_release(self, table: Table) -> None:
        if self._tables.pop(id(table), None) is not None:
            self._metrics.tables_released_total.inc()
            self._metrics.tables_open.dec()

    def release_table(self, table: Table) -> None:
        """Release a table. Equivalent to ``table.release()``."""
        table.release()

    def close(self) -> None:
        """Release every table this engine created that is still open.

        Raises:
            StateError: If the engine was already closed.
        """
        self._ensure_running()
        leaked = self.open_tables
        for table in leaked:
            table.release()
        self._closed = True
        logger.info("table_engine_closed", released=len(leaked))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def sort(self, table: Table, column: ColumnRef) -> None:
        """Stable sort of ``table`` by one column."""
        col = table.column(column)
        with table_span(
            "sort", table.name, column=col.name, rows=table.row_count
        ), self._metrics.sort_latency_seconds.time():
            sort_by_column(table, col.ordinal)
        self._metrics.sorts_total.labels(column_type=col.type.value).inc()

    def find_first(self, table: Table, column: ColumnRef, target: Any) -> RowPosition:
        """First row in current order whose ``column`` equals ``target``, or NOT_FOUND."""
        col = table.column(column)
        with table_span("find_first", table.name, column=col.name) as span:
            row = find_first(table, col.ordinal, target)
            outcome = "not_found" if row == NOT_FOUND else "found"
            span.set_attribute("table.lookup_outcome", outcome)
        self._metrics.lookups_total.labels(outcome=outcome).inc()
        return row

    def update_by_key(
        self,
        table: Table,
        key_column: ColumnRef,
        key_value: Any,
        target_column: ColumnRef,
        new_value: Any,
    ) -> UpdateOutcome:
        """Sort by ``key_column`` and update the first matching row's ``target_column``."""
        with table_span("update_by_key", table.name):
            try:
                outcome = update_by_key(table, key_column, key_value, target_column, new_value)
            except TableError:
                self._metrics.updates_total.labels(mode="key", outcome="rejected").inc()
                raise
        self._metrics.updates_total.labels(mode="key", outcome=outcome.name.lower()).inc()
        return outcome

    def update_by_position(
        self,
        table: Table,
        row: int,
        target_column: ColumnRef,
        new_value: Any,
    ) -> None:
        """Update ``target_column`` of the row at ``row``."""
        with table_span("update_by_position", table.name, row=row):
            try:
                update_by_position(table, row, target_column, new_value)
            except TableError:
                self._metrics.updates_total.labels(mode="position", outcome="rejected").inc()
                raise
        self._metrics.updates_total.labels(mode="position", outcome="updated").inc()

    def merge_tables(
        self,
        table_a: Table | None,
        table_b: Table | None,
        select_a: Sequence[int] | None,
        select_b: Sequence[int] | None,
        name: str = "merged",
    ) -> Table:
        """Merge five columns of each source into a new engine-owned table.

        Column prefixes and the selection width come from ``config.merge``.
        """
        self._ensure_running()
        merge_config = self._config.merge
        with table_span("merge", name) as span:
            try:
                merged = merge_tables(
                    table_a,
                    table_b,
                    select_a,
                    select_b,
                    prefix_a=merge_config.prefix_a,
                    prefix_b=merge_config.prefix_b,
                    table_factory=self.create_table,
                    name=name,
                    selection_width=merge_config.selection_width,
                )
            except TableError:
                self._metrics.merges_total.labels(status="error").inc()
                raise
            span.set_attribute("table.rows", merged.row_count)

        self._metrics.merges_total.labels(status="success").inc()
        self._metrics.merge_rows.observe(merged.row_count)
        self._metrics.rows_added_total.inc(merged.row_count)
        return merged

    def inventory(self, table: Table | None = None) -> InventoryManager:
        """Inventory manager over ``table``, or over a new product table.

        A new table is named after ``config.inventory.table_name`` and has
        the product schema already in place.
        """
        if table is not None:
            return InventoryManager(self, table)
        table = self.create_table(self._config.inventory.table_name)
        manager = InventoryManager(self, table)
        try:
            manager.init_product_table()
        except TableError:
            table.release()
            raise
        return manager
