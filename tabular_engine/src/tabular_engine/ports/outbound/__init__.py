"""Outbound ports - collaborators outside the table core."""

from tabular_engine.ports.outbound.row_source import RowSource
from tabular_engine.ports.outbound.table_sink import TableSink

__all__ = ["RowSource", "TableSink"]
