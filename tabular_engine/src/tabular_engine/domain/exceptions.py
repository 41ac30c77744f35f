"""Exceptions raised by table operations.

Every operation validates its inputs before touching any state, so when
one of these is raised the table involved is unchanged. A lookup or
key-update that matches nothing is not an error; it is reported through
``NOT_FOUND`` / ``UpdateOutcome.NOT_FOUND`` instead.
"""

from __future__ import annotations


class TableError(Exception):
    """Base class for tabular engine errors."""
    pass


class ValidationError(TableError, ValueError):
    """Malformed input: unknown or out-of-range column/row, duplicate name,
    wrong value type, domain rule violation, bad merge selection, or a
    missing/released merge source."""
    pass


class StateError(TableError, RuntimeError):
    """Operation attempted on a released table or an update on an empty one."""
    pass
