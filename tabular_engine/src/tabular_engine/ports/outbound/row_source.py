"""Outbound port for row sources.

A row source supplies the records used to populate a table. The engine
only consumes it; nothing flows back.
"""

from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable

from tabular_engine.domain.entities import Product


@runtime_checkable
class RowSource(Protocol):
    """Protocol for product row sources.

    Example:
        source = InMemoryRowSource(products)
        added = inventory.fill_from_source(source)
    """

    def __iter__(self) -> Iterator[Product | None]:
        """Yield the products to insert, in insertion order.

        ``None`` entries are allowed and are rejected one by one by the
        consumer.
        """
        ...

    def __len__(self) -> int:
        """Number of entries the source will yield."""
        ...
