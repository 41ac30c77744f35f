"""Domain services for the tabular engine.

Domain services contain business logic that doesn't naturally fit within
a single entity. All of them are free functions taking tables explicitly.

Exports:
    - sort_by_column: Stable sort of a table by one column
    - find_first: First-match lookup in current row order
    - update_by_key / update_by_position: Validated cell updates
    - merge_tables: Five-plus-five column projection merge
"""

from tabular_engine.domain.services.merge_engine import (
    DEFAULT_PREFIX_A,
    DEFAULT_PREFIX_B,
    SELECTION_WIDTH,
    copy_cell,
    merge_tables,
    validate_parameters,
)
from tabular_engine.domain.services.search_engine import find_first
from tabular_engine.domain.services.sort_engine import sort_by_column, sort_key_for
from tabular_engine.domain.services.update_service import update_by_key, update_by_position

__all__ = [
    "sort_by_column",
    "sort_key_for",
    "find_first",
    "update_by_key",
    "update_by_position",
    "merge_tables",
    "validate_parameters",
    "copy_cell",
    "SELECTION_WIDTH",
    "DEFAULT_PREFIX_A",
    "DEFAULT_PREFIX_B",
]
