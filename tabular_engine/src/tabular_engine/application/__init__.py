"""Application layer for the tabular engine.

The application layer orchestrates domain logic to fulfill use cases.

Exports:
    TableEngine:
        - TableEngine: Owns tables, adds metrics and tracing to operations
    Inventory:
        - InventoryManager: Product table operations
        - run_inventory_demo: Populate/sort/update/display flow
"""

from tabular_engine.application.inventory import InventoryManager, run_inventory_demo
from tabular_engine.application.table_engine import TableEngine

__all__ = [
    "TableEngine",
    "InventoryManager",
    "run_inventory_demo",
]
