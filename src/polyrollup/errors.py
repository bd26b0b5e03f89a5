"""Exceptions raised by polyrollup."""

from __future__ import annotations

from typing import Sequence


class RollupError(Exception):
    """Base class for all polyrollup errors."""

    pass


class TypeMismatch(RollupError, TypeError):
    """An argument is not a table or has the wrong shape."""

    pass


class UnknownColumn(RollupError, LookupError):
    """A requested grouping column does not exist in the table."""

    def __init__(self, column: str, available: Sequence[str] = ()) -> None:
        self.column = column
        self.available = list(available)
        message = f"Group by key column '{column}' not found in table"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class MergeError(RollupError):
    """Bucket results cannot be aligned on their key columns."""

    pass
