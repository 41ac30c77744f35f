"""Inventory workflow over a product table.

Products are stored one per row using the ProductColumns layout. Stock
updates can be addressed by product ID (the table is re-sorted by ID to
find the first matching row) or by row position.

Usage:
    with TableEngine() as engine:
        inventory = engine.inventory()
        inventory.fill_from_source(sample_products())
        inventory.sort_by(ProductColumns.QUANTITY)
        inventory.update_quantity_by_product_id(101, 8)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from tabular_engine.domain.entities import Product, ProductColumns, Table
from tabular_engine.domain.exceptions import TableError, ValidationError
from tabular_engine.domain.value_objects import RowPosition, UpdateOutcome
from tabular_engine.infrastructure.logging import table_context

if TYPE_CHECKING:
    from tabular_engine.application.table_engine import TableEngine
    from tabular_engine.ports.outbound import RowSource, TableSink

logger = structlog.get_logger(__name__)


def _product_values(product: Product) -> list[Any]:
    price = product.price
    if isinstance(price, int) and not isinstance(price, bool):
        price = float(price)
    return [product.id, product.name, product.category, product.quantity, price]


class InventoryManager:
    """Product inventory operations on a single table."""

    def __init__(self, engine: TableEngine, table: Table) -> None:
        self._engine = engine
        self._table = table

    @property
    def table(self) -> Table:
        return self._table

    def init_product_table(self) -> None:
        """Add the product columns to an empty table.

        Raises:
            ValidationError: If any product column cannot be added.
        """
        for column in ProductColumns:
            self._table.add_column(
                column.col_name,
                column.column_type,
                column.description,
                column.constraint,
            )

    def add_product(self, product: Product | None) -> RowPosition:
        """Append one product.

        Every value is checked before the row is appended, so a rejected
        product leaves the table unchanged.

        Returns:
            Position of the new row.

        Raises:
            ValidationError: If the product is None, its name is blank, or
                its quantity or price is negative or of the wrong type.
        """
        if product is None:
            raise ValidationError("Invalid product: null object.")
        if not isinstance(product.name, str) or not product.name.strip():
            raise ValidationError(f"Invalid product (ID: {product.id}): Name cannot be empty.")
        if isinstance(product.quantity, (int, float)) and product.quantity < 0:
            raise ValidationError(
                f"Invalid product (ID: {product.id}): Quantity cannot be negative."
            )
        if isinstance(product.price, (int, float)) and product.price < 0:
            raise ValidationError(f"Invalid product (ID: {product.id}): Price cannot be negative.")

        values = _product_values(product)
        for column, value in zip(ProductColumns, values):
            self._table.validate_value(column.col_name, value)

        row = self._table.add_row()
        for column, value in zip(ProductColumns, values):
            self._table.set_value(column.col_name, row, value)
        self._engine.metrics.rows_added_total.inc()

        logger.info("product_added", table=self._table.name, product_id=product.id, name=product.name)
        return row

    def fill_from_source(self, source: RowSource) -> int:
        """Add every product the source yields.

        Products that fail validation are logged and skipped; the rest are
        still added.

        Returns:
            Number of products added.

        Raises:
            ValidationError: If the source is empty and the configuration
                treats that as an error.
        """
        if len(source) == 0:
            if self._engine.config.inventory.empty_source_is_error:
                raise ValidationError("Product list is empty.")
            logger.warning("product_source_empty", table=self._table.name)
            return 0

        added = 0
        for product in source:
            try:
                self.add_product(product)
            except ValidationError as e:
                logger.warning("product_rejected", table=self._table.name, error=str(e))
                continue
            added += 1
        return added

    def sort_by(self, column: ProductColumns) -> None:
        self._engine.sort(self._table, column.col_name)

    def find_product(self, product_id: int) -> RowPosition:
        """Row of the first product with this ID in current order, or NOT_FOUND."""
        return self._engine.find_first(self._table, ProductColumns.PRODUCT_ID.col_name, product_id)

    def update_quantity_by_product_id(self, product_id: int, new_quantity: int) -> UpdateOutcome:
        """Set the stock quantity of the product with this ID.

        Sorts the table by product ID as a side effect.

        Raises:
            StateError: If the table is empty.
            ValidationError: If the quantity is negative.
        """
        return self._engine.update_by_key(
            self._table,
            ProductColumns.PRODUCT_ID.col_name,
            product_id,
            ProductColumns.QUANTITY.col_name,
            new_quantity,
        )

    def update_quantity_by_row(self, row: int, new_quantity: int) -> None:
        """Set the stock quantity of the product at a row position.

        Raises:
            StateError: If the table is empty.
            ValidationError: If the row is invalid or the quantity negative.
        """
        self._engine.update_by_position(
            self._table, row, ProductColumns.QUANTITY.col_name, new_quantity
        )

    def products(self) -> list[Product]:
        """Current rows as Product records, in row order."""
        return [Product(*values) for values in self._table.iter_rows()]


def run_inventory_demo(
    engine: TableEngine,
    source: RowSource,
    sink: TableSink,
) -> list[Product]:
    """Populate, sort, display, and update a product table, then release it.

    Failed updates are logged and the flow carries on, in the same way as
    rejected products during the fill.

    Returns:
        The products in their final order, captured before release.
    """
    inventory = engine.inventory()
    table = inventory.table
    try:
        with table_context(table.name, flow="inventory_demo"):
            inventory.fill_from_source(source)
            inventory.sort_by(ProductColumns.QUANTITY)
            sink.render(table)

            try:
                inventory.update_quantity_by_product_id(101, 8)
                inventory.sort_by(ProductColumns.QUANTITY)
            except TableError as e:
                logger.warning("inventory_update_failed", product_id=101, error=str(e))

            try:
                inventory.update_quantity_by_row(2, 25)
                inventory.sort_by(ProductColumns.QUANTITY)
            except TableError as e:
                logger.warning("inventory_update_failed", row=2, error=str(e))

            sink.render(table)
            return inventory.products()
    finally:
        table.release()
