"""Prometheus metrics for the tabular engine."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all tabular engine metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Table lifecycle
        self.tables_created_total = Counter(
            "tabular_tables_created_total",
            "Total number of tables created",
            registry=self._registry,
        )

        self.tables_released_total = Counter(
            "tabular_tables_released_total",
            "Total number of tables released",
            registry=self._registry,
        )

        self.tables_open = Gauge(
            "tabular_tables_open",
            "Number of tables currently open",
            registry=self._registry,
        )

        # Row store
        self.rows_added_total = Counter(
            "tabular_rows_added_total",
            "Total rows appended to tables",
            registry=self._registry,
        )

        # Sort engine
        self.sorts_total = Counter(
            "tabular_sorts_total",
            "Total sort operations",
            ["column_type"],  # integer, double, text, datetime
            registry=self._registry,
        )

        self.sort_latency_seconds = Histogram(
            "tabular_sort_latency_seconds",
            "Sort latency in seconds",
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        # Search engine
        self.lookups_total = Counter(
            "tabular_lookups_total",
            "Total first-match lookups",
            ["outcome"],  # found, not_found
            registry=self._registry,
        )

        # Updates
        self.updates_total = Counter(
            "tabular_updates_total",
            "Total cell update operations",
            ["mode", "outcome"],  # mode: key, position; outcome: updated, not_found, rejected
            registry=self._registry,
        )

        # Merge engine
        self.merges_total = Counter(
            "tabular_merges_total",
            "Total merge operations",
            ["status"],  # success, error
            registry=self._registry,
        )

        self.merge_rows = Histogram(
            "tabular_merge_rows",
            "Rows produced per merge",
            buckets=(0, 1, 5, 10, 50, 100, 500, 1000, 5000, 10000),
            registry=self._registry,
        )

        self.info = Info(
            "tabular_engine",
            "Tabular engine information",
            registry=self._registry,
        )


_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from tabular_engine import __version__
    _metrics.info.info({"version": __version__})

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
