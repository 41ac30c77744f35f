"""Outbound adapters - concrete row sources and table sinks."""

from tabular_engine.adapters.outbound.logging_table_sink import LoggingTableSink
from tabular_engine.adapters.outbound.memory_row_source import InMemoryRowSource, sample_products

__all__ = ["InMemoryRowSource", "LoggingTableSink", "sample_products"]
