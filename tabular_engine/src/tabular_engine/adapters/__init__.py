"""Adapters layer - implementations of the port protocols.

Exports:
    Outbound:
        - InMemoryRowSource: RowSource over a list of products
        - LoggingTableSink: TableSink writing rows as structlog events
"""

from tabular_engine.adapters.outbound import InMemoryRowSource, LoggingTableSink, sample_products

__all__ = ["InMemoryRowSource", "LoggingTableSink", "sample_products"]
