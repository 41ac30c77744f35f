"""Domain entities for the tabular engine.

Entities are objects with identity that have a lifecycle. Unlike value objects,
two entities with the same attributes may not be equal if they have different
identities.

Exports:
    Schema:
        - ColumnDef: Named, typed column definition with a domain rule

    Table:
        - Table: Column schema plus row store with an explicit release

    Inventory:
        - Product: Product record used to populate product tables
        - ProductColumns: Column layout of the product table
"""

from tabular_engine.domain.entities.column import ColumnDef
from tabular_engine.domain.entities.product import Product, ProductColumns
from tabular_engine.domain.entities.table import Table

__all__ = [
    "ColumnDef",
    "Table",
    "Product",
    "ProductColumns",
]
