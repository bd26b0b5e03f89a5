"""Merging per-bucket results back into one table."""

from __future__ import annotations

from typing import Optional, Sequence

import polars as pl

from polyrollup.errors import MergeError


def _check_keys(frame: pl.DataFrame, anchor: pl.DataFrame, keys: list[str]) -> None:
    """Validate that ``frame`` carries the key columns with the anchor's dtypes."""
    for key in keys:
        if key not in frame.schema:
            raise MergeError(f"Key column '{key}' not found in bucket result")
        if frame.schema[key] != anchor.schema[key]:
            raise MergeError(
                f"Key dtype mismatch: anchor '{key}' is {anchor.schema[key]}, "
                f"bucket result '{key}' is {frame.schema[key]}"
            )


def _check_no_overlap(frames: Sequence[pl.DataFrame], keys: list[str]) -> None:
    seen: set[str] = set(keys)
    for frame in frames:
        for name in frame.columns:
            if name in keys:
                continue
            if name in seen:
                raise MergeError(f"Column '{name}' produced by more than one bucket")
            seen.add(name)


def merge_on_keys(
    anchor: pl.DataFrame,
    results: Sequence[Optional[pl.DataFrame]],
    keys: list[str],
) -> pl.DataFrame:
    """
    Left-join bucket results onto the anchor of distinct key combinations.

    Args:
        anchor: One row per key combination to keep, key columns only
        results: Grouped bucket results; None entries are skipped
        keys: Key columns to join on (nulls compare equal)

    Returns:
        anchor rows with every result's value columns appended; values are
        null where a result has no row for a key combination

    Raises:
        MergeError: If a result lacks a key, has a different key dtype, or
                    repeats a value column
    """
    if not keys:
        raise MergeError("merge_on_keys requires at least one key column")

    frames = [result for result in results if result is not None]
    _check_no_overlap(frames, keys)

    merged = anchor.select(keys)
    for frame in frames:
        _check_keys(frame, merged, keys)
        merged = merged.join(
            frame,
            on=keys,
            how="left",
            nulls_equal=True,
            maintain_order="left",
        )
    return merged


def concat_columns(results: Sequence[Optional[pl.DataFrame]]) -> pl.DataFrame:
    """
    Concatenate ungrouped one-row results side by side.

    Missing or zero-width results are dropped so they do not change the
    width of the merge. With nothing left an empty DataFrame is returned.

    Raises:
        MergeError: If the remaining results differ in height or repeat a column
    """
    frames = [r for r in results if r is not None and r.width > 0]
    if not frames:
        return pl.DataFrame()

    heights = {frame.height for frame in frames}
    if len(heights) > 1:
        raise MergeError(f"Cannot concatenate results of heights {sorted(heights)}")
    _check_no_overlap(frames, [])

    return pl.concat(frames, how="horizontal")
