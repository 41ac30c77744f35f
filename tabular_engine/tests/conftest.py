"""Pytest configuration and fixtures for tabular_engine tests."""

from __future__ import annotations

from datetime import datetime
from typing import Generator

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from prometheus_client import CollectorRegistry

from tabular_engine.application import TableEngine
from tabular_engine.domain.entities import Table
from tabular_engine.domain.value_objects import ColumnType
from tabular_engine.infrastructure import tracing
from tabular_engine.infrastructure.config import Config, InventoryConfig, MergeConfig
from tabular_engine.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def collector_registry() -> CollectorRegistry:
    """Provide an isolated Prometheus registry for each test."""
    return CollectorRegistry(auto_describe=True)


@pytest.fixture
def metrics_registry(collector_registry: CollectorRegistry) -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    return MetricsRegistry(registry=collector_registry)


@pytest.fixture
def span_exporter(monkeypatch: pytest.MonkeyPatch) -> InMemorySpanExporter:
    """Route engine spans to an in-memory exporter for the test."""
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setattr(tracing, "_tracer", provider.get_tracer("tabular_engine.tests"))
    return exporter


@pytest.fixture
def test_config() -> Config:
    """Provide a configuration independent of the environment."""
    return Config(
        merge=MergeConfig(),
        inventory=InventoryConfig(table_name="Products"),
    )


@pytest.fixture
def engine(
    test_config: Config, metrics_registry: MetricsRegistry
) -> Generator[TableEngine, None, None]:
    """Provide a table engine that is closed after the test."""
    with TableEngine(config=test_config, metrics=metrics_registry) as e:
        yield e


@pytest.fixture
def five_column_table() -> Generator[Table, None, None]:
    """Table with one column of every type plus a second integer column, four rows."""
    with Table("profiles") as table:
        table.add_column("ID", ColumnType.INTEGER, "Customer ID")
        table.add_column("Name", ColumnType.TEXT, "Customer Name")
        table.add_column("Score", ColumnType.DOUBLE, "Credit Score")
        table.add_column("Joined", ColumnType.DATETIME, "Join Date")
        table.add_column("Age", ColumnType.INTEGER, "Age")
        rows = [
            (1, "Ana", 710.5, datetime(2020, 1, 15), 34),
            (2, "Ben", 640.0, datetime(2019, 6, 1), 45),
            (3, "Cai", 802.25, datetime(2021, 3, 9), 29),
            (4, "Dee", 555.0, datetime(2018, 11, 30), 51),
        ]
        for values in rows:
            row = table.add_row()
            for column, value in enumerate(values):
                table.set_value(column, row, value)
        yield table


@pytest.fixture
def six_row_table() -> Generator[Table, None, None]:
    """Transactions table with six columns and six rows."""
    with Table("transactions") as table:
        table.add_column("TxnID", ColumnType.INTEGER)
        table.add_column("CustomerID", ColumnType.INTEGER)
        table.add_column("Amount", ColumnType.DOUBLE)
        table.add_column("Currency", ColumnType.TEXT)
        table.add_column("At", ColumnType.DATETIME)
        table.add_column("Channel", ColumnType.TEXT)
        for i in range(6):
            row = table.add_row()
            table.set_value("TxnID", row, 1000 + i)
            table.set_value("CustomerID", row, i + 1)
            table.set_value("Amount", row, 10.0 * (i + 1))
            table.set_value("Currency", row, "EUR" if i % 2 else "USD")
            table.set_value("At", row, datetime(2024, 1, i + 1, 12, 0))
            table.set_value("Channel", row, "web")
        yield table


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
