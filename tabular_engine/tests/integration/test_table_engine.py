"""Integration tests for the TableEngine facade.

Covers table ownership, the observability wrappers around each operation,
and merging through the engine with configured prefixes.
"""

from __future__ import annotations

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from prometheus_client import CollectorRegistry

from tabular_engine.application import TableEngine
from tabular_engine.application import table_engine as table_engine_module
from tabular_engine.domain.entities import Table
from tabular_engine.domain.exceptions import StateError, ValidationError
from tabular_engine.domain.value_objects import NOT_FOUND, ColumnType, UpdateOutcome
from tabular_engine.infrastructure.config import Config, MergeConfig
from tabular_engine.infrastructure.metrics import MetricsRegistry

ALL_FIVE = [0, 1, 2, 3, 4]


def _sample(registry: CollectorRegistry, name: str, **labels: str) -> float:
    return registry.get_sample_value(name, labels or None) or 0.0


def _scores(engine: TableEngine) -> Table:
    table = engine.create_table("scores")
    table.add_column("Player", ColumnType.TEXT)
    table.add_column("Points", ColumnType.INTEGER)
    for player, points in [("p1", 30), ("p2", 10), ("p3", 20), ("p4", 10)]:
        row = table.add_row()
        table.set_value("Player", row, player)
        table.set_value("Points", row, points)
    return table


@pytest.mark.integration
class TestTableOwnership:
    """Engine-owned table lifecycle."""

    def test_create_and_release(
        self, engine: TableEngine, collector_registry: CollectorRegistry
    ) -> None:
        table = engine.create_table("t1")
        assert engine.open_tables == [table]
        assert _sample(collector_registry, "tabular_tables_created_total") == 1
        assert _sample(collector_registry, "tabular_tables_open") == 1

        engine.release_table(table)

        assert engine.open_tables == []
        assert table.is_released
        assert _sample(collector_registry, "tabular_tables_released_total") == 1
        assert _sample(collector_registry, "tabular_tables_open") == 0

    def test_direct_release_is_tracked(self, engine: TableEngine) -> None:
        table = engine.create_table()
        table.release()
        assert engine.open_tables == []

    def test_close_releases_leftovers(
        self, test_config: Config, metrics_registry: MetricsRegistry
    ) -> None:
        engine = TableEngine(config=test_config, metrics=metrics_registry)
        first = engine.create_table("a")
        second = engine.create_table("b")
        second.release()

        engine.close()

        assert first.is_released
        assert engine.open_tables == []
        with pytest.raises(StateError):
            engine.close()
        with pytest.raises(StateError):
            engine.create_table("late")

    def test_context_manager_closes(
        self, test_config: Config, metrics_registry: MetricsRegistry
    ) -> None:
        with TableEngine(config=test_config, metrics=metrics_registry) as engine:
            table = engine.create_table()
        assert table.is_released


@pytest.mark.integration
class TestOperations:
    """Sort, lookup and update through the engine."""

    def test_sort_records_metrics(
        self, engine: TableEngine, collector_registry: CollectorRegistry
    ) -> None:
        table = _scores(engine)

        engine.sort(table, "Points")

        assert table.column_values("Player") == ["p2", "p4", "p3", "p1"]
        assert _sample(collector_registry, "tabular_sorts_total", column_type="integer") == 1
        assert _sample(collector_registry, "tabular_sort_latency_seconds_count") == 1

    def test_find_first_outcomes(
        self, engine: TableEngine, collector_registry: CollectorRegistry
    ) -> None:
        table = _scores(engine)

        assert engine.find_first(table, "Points", 10) == 1
        assert engine.find_first(table, "Points", 99) == NOT_FOUND

        assert _sample(collector_registry, "tabular_lookups_total", outcome="found") == 1
        assert _sample(collector_registry, "tabular_lookups_total", outcome="not_found") == 1

    def test_update_by_key_outcomes(
        self, engine: TableEngine, collector_registry: CollectorRegistry
    ) -> None:
        table = _scores(engine)

        assert engine.update_by_key(table, "Player", "p3", "Points", 25) is UpdateOutcome.UPDATED
        assert engine.update_by_key(table, "Player", "p9", "Points", 1) is UpdateOutcome.NOT_FOUND
        with pytest.raises(ValidationError):
            engine.update_by_key(table, "Player", "p1", "Points", "x")

        assert table.get_value("Points", engine.find_first(table, "Player", "p3")) == 25
        assert (
            _sample(collector_registry, "tabular_updates_total", mode="key", outcome="updated") == 1
        )
        assert (
            _sample(collector_registry, "tabular_updates_total", mode="key", outcome="not_found")
            == 1
        )
        assert (
            _sample(collector_registry, "tabular_updates_total", mode="key", outcome="rejected")
            == 1
        )

    def test_update_by_position(
        self, engine: TableEngine, collector_registry: CollectorRegistry
    ) -> None:
        table = _scores(engine)

        engine.update_by_position(table, 0, "Points", 31)
        with pytest.raises(ValidationError, match="Row number 4 is invalid"):
            engine.update_by_position(table, 4, "Points", 1)

        assert table.get_value("Points", 0) == 31
        assert (
            _sample(collector_registry, "tabular_updates_total", mode="position", outcome="updated")
            == 1
        )
        assert (
            _sample(
                collector_registry, "tabular_updates_total", mode="position", outcome="rejected"
            )
            == 1
        )

    def test_lookup_and_sort_spans(
        self, engine: TableEngine, span_exporter: InMemorySpanExporter
    ) -> None:
        table = _scores(engine)

        engine.find_first(table, "Points", 20)
        engine.find_first(table, "Player", "nobody")
        engine.sort(table, "Points")

        spans = span_exporter.get_finished_spans()
        assert [s.name for s in spans] == ["table.find_first", "table.find_first", "table.sort"]
        assert spans[0].attributes["table.name"] == "scores"
        assert spans[0].attributes["table.column"] == "Points"
        assert spans[0].attributes["table.lookup_outcome"] == "found"
        assert spans[1].attributes["table.lookup_outcome"] == "not_found"
        assert spans[2].attributes["table.rows"] == 4

    def test_update_empty_table(self, engine: TableEngine) -> None:
        table = engine.create_table("empty")
        table.add_column("K", ColumnType.INTEGER)
        with pytest.raises(StateError):
            engine.update_by_key(table, "K", 1, "K", 2)


@pytest.mark.integration
class TestMergeThroughEngine:
    """Merging with engine-owned output tables."""

    def test_merge_is_owned_and_measured(
        self,
        engine: TableEngine,
        collector_registry: CollectorRegistry,
        five_column_table: Table,
        six_row_table: Table,
    ) -> None:
        merged = engine.merge_tables(
            five_column_table, six_row_table, ALL_FIVE, ALL_FIVE, name="customers"
        )

        assert merged in engine.open_tables
        assert merged.name == "customers"
        assert merged.row_count == 4
        assert merged.column(0).name == "CustomerProfile_ID"
        assert merged.column(5).name == "CustomerTransactions_TxnID"
        assert _sample(collector_registry, "tabular_merges_total", status="success") == 1
        assert _sample(collector_registry, "tabular_merge_rows_sum") == 4
        assert _sample(collector_registry, "tabular_rows_added_total") == 4

    def test_failed_merge_leaves_nothing_open(
        self,
        engine: TableEngine,
        collector_registry: CollectorRegistry,
        five_column_table: Table,
        six_row_table: Table,
    ) -> None:
        with pytest.raises(ValidationError):
            engine.merge_tables(five_column_table, six_row_table, [0, 1, 2, 3], ALL_FIVE)

        assert engine.open_tables == []
        assert _sample(collector_registry, "tabular_merges_total", status="error") == 1

    def test_configured_prefixes(
        self,
        metrics_registry: MetricsRegistry,
        five_column_table: Table,
        six_row_table: Table,
    ) -> None:
        config = Config(merge=MergeConfig(prefix_a="left_", prefix_b="right_"))
        with TableEngine(config=config, metrics=metrics_registry) as engine:
            merged = engine.merge_tables(five_column_table, six_row_table, ALL_FIVE, ALL_FIVE)
            assert merged.column(0).name == "left_ID"
            assert merged.column(9).name == "right_At"
        assert merged.is_released
        assert not five_column_table.is_released

    def test_selection_width_comes_from_config(
        self,
        engine: TableEngine,
        five_column_table: Table,
        six_row_table: Table,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        calls: list[dict] = []
        domain_merge = table_engine_module.merge_tables

        def recording_merge(*args, **kwargs):
            calls.append(kwargs)
            return domain_merge(*args, **kwargs)

        monkeypatch.setattr(table_engine_module, "merge_tables", recording_merge)

        engine.merge_tables(five_column_table, six_row_table, ALL_FIVE, ALL_FIVE)

        assert calls[0]["selection_width"] == engine.config.merge.selection_width
        assert calls[0]["prefix_a"] == engine.config.merge.prefix_a
