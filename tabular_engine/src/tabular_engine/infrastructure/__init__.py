"""Infrastructure layer - cross-cutting concerns."""

from tabular_engine.infrastructure.config import Config, get_config
from tabular_engine.infrastructure.logging import (
    encode_cell_values,
    get_logger,
    setup_logging,
    setup_logging_from_config,
    table_context,
)
from tabular_engine.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from tabular_engine.infrastructure.tracing import get_tracer, setup_tracing, table_span, trace_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "table_context",
    "encode_cell_values",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
    "table_span",
]
