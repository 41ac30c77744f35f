"""In-memory row source adapter.

A simple implementation of RowSource over a list of products, for tests
and the inventory demo flow.

Usage:
    source = InMemoryRowSource([Product(101, "Laptop", "Electronics", 5, 1200.0)])
    inventory.fill_from_source(source)
"""

from __future__ import annotations

from typing import Iterable, Iterator

from tabular_engine.domain.entities import Product


class InMemoryRowSource:
    """In-memory implementation of RowSource.

    The products are captured at construction; later changes to the
    iterable passed in are not seen.
    """

    def __init__(self, products: Iterable[Product | None] | None = None) -> None:
        self._products: list[Product | None] = list(products or [])

    def __iter__(self) -> Iterator[Product | None]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def append(self, product: Product | None) -> None:
        """Queue one more product."""
        self._products.append(product)


def sample_products() -> InMemoryRowSource:
    """The four-product catalogue used by the inventory demo."""
    return InMemoryRowSource(
        [
            Product(101, "Laptop", "Electronics", 5, 1200.0),
            Product(102, "Mouse", "Electronics", 20, 15.5),
            Product(103, "Chair", "Furniture", 10, 85.0),
            Product(104, "Desk", "Furniture", 5, 150.0),
        ]
    )
