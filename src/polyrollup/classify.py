"""Column classification by semantic type."""

from __future__ import annotations

import polars as pl

from polyrollup.errors import TypeMismatch
from polyrollup.types import TableSchema, parse_type_label


def ensure_table(table: object, argument: str = "table") -> pl.DataFrame:
    """Return ``table`` if it is a polars DataFrame, else raise TypeMismatch."""
    if not isinstance(table, pl.DataFrame):
        raise TypeMismatch(
            f"'{argument}' must be a polars DataFrame, got {type(table).__name__}"
        )
    return table


def table_schema(table: pl.DataFrame) -> TableSchema:
    """Build the semantic schema of a table."""
    return TableSchema.from_frame(ensure_table(table))


def columns_of_type(table: pl.DataFrame, type_label: str) -> list[str]:
    """
    Get the names of a table's columns of a given semantic type.

    Args:
        table: The table to inspect
        type_label: Semantic type label, e.g. "numeric" or "date"

    Returns:
        Matching column names in table order; empty if none match or the
        label names no known type

    Raises:
        TypeMismatch: If table is not a DataFrame or type_label is not a string
    """
    schema = table_schema(table)
    if not isinstance(type_label, str):
        raise TypeMismatch(
            f"'type_label' must be a string, got {type(type_label).__name__}"
        )

    semantic_type = parse_type_label(type_label)
    if semantic_type is None:
        return []
    return schema.columns_of(semantic_type)
