"""Domain layer - typed tables and the operations defined on them."""

from tabular_engine.domain.entities import ColumnDef, Product, ProductColumns, Table
from tabular_engine.domain.exceptions import StateError, TableError, ValidationError
from tabular_engine.domain.value_objects import (
    NOT_FOUND,
    ColumnConstraint,
    ColumnType,
    RowPosition,
    UpdateOutcome,
)

__all__ = [
    "ColumnDef",
    "Table",
    "Product",
    "ProductColumns",
    "TableError",
    "ValidationError",
    "StateError",
    "ColumnType",
    "ColumnConstraint",
    "RowPosition",
    "NOT_FOUND",
    "UpdateOutcome",
]
