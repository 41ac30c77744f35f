"""Product record and the product table's column layout."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tabular_engine.domain.value_objects import ColumnConstraint, ColumnType


@dataclass(frozen=True, slots=True)
class Product:
    """A product with an ID, name, category, quantity, and unit price."""

    id: int
    name: str
    category: str
    quantity: int
    price: float


class ProductColumns(Enum):
    """Columns of the product table, in schema order.

    Each member carries the column name, its type, the display description,
    and the domain rule enforced on writes. Quantity and unit price reject
    negative values.
    """

    PRODUCT_ID = ("ProductID", ColumnType.INTEGER, "Product ID", ColumnConstraint.NONE)
    PRODUCT_NAME = ("ProductName", ColumnType.TEXT, "Product Name", ColumnConstraint.NONE)
    CATEGORY = ("Category", ColumnType.TEXT, "Category", ColumnConstraint.NONE)
    QUANTITY = ("Quantity", ColumnType.INTEGER, "Quantity in Stock", ColumnConstraint.NON_NEGATIVE)
    UNIT_PRICE = ("UnitPrice", ColumnType.DOUBLE, "Unit Price", ColumnConstraint.NON_NEGATIVE)

    def __init__(
        self,
        col_name: str,
        column_type: ColumnType,
        description: str,
        constraint: ColumnConstraint,
    ) -> None:
        self.col_name = col_name
        self.column_type = column_type
        self.description = description
        self.constraint = constraint
