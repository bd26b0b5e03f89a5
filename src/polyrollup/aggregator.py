"""Roll up a table over grouping columns with automatic sum/mean/min buckets."""

from __future__ import annotations

import logging
from typing import Sequence, Union

import polars as pl

from polyrollup.classify import ensure_table, table_schema
from polyrollup.errors import TypeMismatch, UnknownColumn
from polyrollup.ops.merge import concat_columns, merge_on_keys
from polyrollup.ops.reduce import AggBucket, AggFunction, reduce_bucket
from polyrollup.patterns import DEFAULT_MEAN_PATTERN, NameRule, split_by_rule
from polyrollup.types import SemanticType

logger = logging.getLogger(__name__)

GroupBy = Union[None, str, Sequence[str]]


def _normalize_group_by(group_by: GroupBy, columns: list[str]) -> list[str]:
    """Validate ``group_by`` and return it as a duplicate-free list."""
    if group_by is None:
        return []
    if isinstance(group_by, str):
        group_by = [group_by]
    elif not isinstance(group_by, (list, tuple)):
        raise TypeMismatch(
            "'group_by' must be a column name or a list of column names, "
            f"got {type(group_by).__name__}"
        )

    keys: list[str] = []
    for key in group_by:
        if not isinstance(key, str):
            raise TypeMismatch(
                f"'group_by' entries must be strings, got {type(key).__name__} {key!r}"
            )
        if key not in columns:
            raise UnknownColumn(key, columns)
        if key not in keys:
            keys.append(key)
    return keys


def build_buckets(
    table: pl.DataFrame,
    keys: list[str],
    mean_name_pattern: NameRule = DEFAULT_MEAN_PATTERN,
) -> tuple[AggBucket, AggBucket, AggBucket]:
    """
    Assign the non-key columns of a table to the sum, mean and min buckets.

    Numeric columns whose name matches ``mean_name_pattern`` are averaged,
    other numeric columns are summed and date columns take their earliest
    value. Columns keep their table order within each bucket.
    """
    schema = table_schema(table)
    metrics = [
        c for c in schema.columns_of(SemanticType.NUMERIC) if c not in keys
    ]
    mean_metrics, sum_metrics = split_by_rule(metrics, mean_name_pattern)
    date_columns = [c for c in schema.columns_of(SemanticType.DATE) if c not in keys]

    bucketed = set(keys) | set(metrics) | set(date_columns)
    dropped = [c for c in schema.columns if c not in bucketed]
    if dropped:
        logger.debug("Columns not aggregated: %s", ", ".join(dropped))
    logger.debug(
        "Buckets: sum=%s mean=%s min=%s", sum_metrics, mean_metrics, date_columns
    )

    return (
        AggBucket(AggFunction.SUM, sum_metrics),
        AggBucket(AggFunction.MEAN, mean_metrics),
        AggBucket(AggFunction.MIN, date_columns),
    )


def aggregate(
    table: pl.DataFrame,
    group_by: GroupBy = None,
    mean_name_pattern: NameRule = DEFAULT_MEAN_PATTERN,
    *,
    ignore_missing: bool = True,
) -> pl.DataFrame:
    """
    Aggregate a table over grouping columns.

    Numeric columns are summed, or averaged when their name matches
    ``mean_name_pattern`` (rates such as ``bounceRate`` or ``avgSessionDuration``).
    Date columns take their earliest value. Other non-key columns are dropped.

    Args:
        table: The table to aggregate
        group_by: Column name(s) to group by; None or empty collapses the
                  whole table into one row
        mean_name_pattern: Regex string, compiled pattern or predicate on
                           column names selecting the averaged columns
        ignore_missing: Leave nulls and NaN out of every reduction

    Returns:
        One row per distinct key combination, sorted by the keys (nulls last).
        Columns are the keys, then the summed, averaged and date columns,
        each in table order.

    Raises:
        TypeMismatch: If table is not a DataFrame or an argument has the wrong shape
        UnknownColumn: If a group_by column is not in the table

    Example:
        >>> df = pl.DataFrame({"hour": ["01", "01", "02"], "sessions": [10, 20, 5]})
        >>> aggregate(df, "hour")["sessions"].to_list()
        [30, 5]
    """
    table = ensure_table(table)
    keys = _normalize_group_by(group_by, table.columns)
    buckets = build_buckets(table, keys, mean_name_pattern)

    results = [
        reduce_bucket(table, keys, bucket, ignore_missing=ignore_missing)
        for bucket in buckets
    ]

    if not keys:
        return concat_columns(results)

    anchor = table.select(keys).unique(maintain_order=True)
    merged = merge_on_keys(anchor, results, keys)
    return merged.sort(keys, nulls_last=True, maintain_order=True)
