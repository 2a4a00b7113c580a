"""Row normalization.

A row is either an ordered sequence (``list`` or ``tuple``) or a scalar. A
scalar is treated exactly like a one-element sequence holding it.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


Row = Any
Values = tuple[Any, ...]

# str, bytes and mappings are sequences/iterables too, but they are row values.
_SEQUENCE_TYPES = (list, tuple)


def normalize(row: Row) -> Values:
    """Return the row as an ordered tuple of values."""
    if isinstance(row, _SEQUENCE_TYPES):
        return tuple(row)
    return (row,)


def normalize_all(rows: Iterable[Row]) -> tuple[Values, ...]:
    return tuple(normalize(row) for row in rows)


def longest(rows: Iterable[Row]) -> int:
    """Length of the longest normalized row, ``0`` for no rows."""
    return max((len(normalize(row)) for row in rows), default=0)


__all__ = ["Row", "Values", "longest", "normalize", "normalize_all"]
