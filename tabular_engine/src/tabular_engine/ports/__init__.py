"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are protocols that define contracts with the outside world:
- Outbound ports: the row source that feeds tables and the sink that
  displays them.

Adapters implement these ports with concrete functionality.
"""

from tabular_engine.ports.outbound import RowSource, TableSink

__all__ = [
    "RowSource",
    "TableSink",
]
