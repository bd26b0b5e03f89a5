"""Command-line interface for polyrollup."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import polars as pl

from polyrollup import __version__
from polyrollup.aggregator import aggregate
from polyrollup.errors import RollupError
from polyrollup.patterns import DEFAULT_MEAN_PATTERN


def read_table(file_path: Path) -> pl.DataFrame:
    """
    Read a CSV or Parquet file into a DataFrame.

    CSV date columns are parsed so they aggregate as dates.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file extension is not supported
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix == ".csv":
        return pl.read_csv(file_path, try_parse_dates=True)
    if suffix == ".parquet":
        return pl.read_parquet(file_path)
    raise ValueError(f"Unsupported input format: {file_path.suffix or file_path.name}")


def write_table(frame: pl.DataFrame, output: Optional[Path]) -> None:
    """Write a DataFrame to ``output`` (CSV or Parquet), or CSV on stdout."""
    if output is None:
        sys.stdout.write(frame.write_csv())
        return

    suffix = output.suffix.lower()
    if suffix == ".csv":
        frame.write_csv(output)
    elif suffix == ".parquet":
        frame.write_parquet(output)
    else:
        raise ValueError(f"Unsupported output format: {output.suffix or output.name}")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="polyrollup",
        description="Aggregate a table, summing metrics and averaging rates",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="CSV or Parquet file to aggregate",
    )
    parser.add_argument(
        "-g",
        "--group-by",
        action="append",
        default=[],
        metavar="COLUMN",
        help="Column to group by (repeatable; omit to aggregate everything)",
    )
    parser.add_argument(
        "--mean-pattern",
        default=DEFAULT_MEAN_PATTERN,
        metavar="REGEX",
        help="Regex for numeric columns to average instead of sum",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write to a .csv or .parquet file instead of stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    return parser


def main(args: Optional[list[str]] = None) -> int:
    """
    Entry point for the CLI.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        table = read_table(parsed.path)
        result = aggregate(table, parsed.group_by, parsed.mean_pattern)
        write_table(result, parsed.output)
    except (RollupError, OSError, ValueError, pl.exceptions.PolarsError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
