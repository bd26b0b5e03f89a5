"""Grouped reductions over aggregation buckets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

import polars as pl

from polyrollup.errors import RollupError


class AggFunction(Enum):
    """Reductions a bucket can apply."""

    SUM = "sum"
    MEAN = "mean"
    MIN = "min"


@dataclass
class AggBucket:
    """A set of non-key columns reduced with the same function."""

    function: AggFunction
    columns: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.columns


def _nan_as_null(frame: pl.DataFrame, column: str) -> pl.Expr:
    """Column expression with NaN turned into null for float columns."""
    expr = pl.col(column)
    if frame.schema[column].is_float():
        expr = expr.fill_nan(None)
    return expr


_REDUCERS: dict[AggFunction, Callable[[pl.Expr], pl.Expr]] = {
    AggFunction.SUM: lambda expr: expr.sum(),
    AggFunction.MEAN: lambda expr: expr.mean(),
    AggFunction.MIN: lambda expr: expr.min(),
}


def reduce_expr(
    frame: pl.DataFrame,
    column: str,
    function: AggFunction,
    *,
    ignore_missing: bool = True,
) -> pl.Expr:
    """
    Build the reduction expression for one column.

    With ``ignore_missing`` nulls (and NaN in float columns) are left out of
    the reduction: sums of all-missing groups are 0, means and minimums are
    null. Without it any missing value makes the group's result null.
    """
    if column not in frame.schema:
        raise RollupError(f"Aggregation column '{column}' not found in table")

    reducer = _REDUCERS[function]
    if ignore_missing:
        return reducer(_nan_as_null(frame, column)).alias(column)

    expr = pl.col(column)
    if frame.schema[column].is_float():
        has_missing = expr.is_null().any() | expr.is_nan().any()
    else:
        has_missing = expr.is_null().any()
    return (
        pl.when(has_missing).then(None).otherwise(reducer(expr)).alias(column)
    )


def reduce_bucket(
    frame: pl.DataFrame,
    keys: list[str],
    bucket: AggBucket,
    *,
    ignore_missing: bool = True,
) -> Optional[pl.DataFrame]:
    """
    Reduce every column of a bucket, grouped by ``keys``.

    Args:
        frame: The input table
        keys: Grouping columns; empty reduces the whole table to one row
        bucket: The columns to reduce and the reduction to use
        ignore_missing: Leave missing values out of the reduction

    Returns:
        keys + bucket columns, one row per distinct key combination in
        first-appearance order, or None for an empty bucket
    """
    if bucket.is_empty():
        return None

    exprs = [
        reduce_expr(frame, column, bucket.function, ignore_missing=ignore_missing)
        for column in bucket.columns
    ]
    narrowed = frame.select([*keys, *bucket.columns])

    if not keys:
        return narrowed.select(exprs)
    return narrowed.group_by(keys, maintain_order=True).agg(exprs)
