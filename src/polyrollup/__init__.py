"""Roll up Polars DataFrames with automatic sum, mean and earliest-date columns."""

__version__ = "0.1.0"

from polyrollup.aggregator import aggregate
from polyrollup.classify import columns_of_type, table_schema
from polyrollup.errors import MergeError, RollupError, TypeMismatch, UnknownColumn
from polyrollup.patterns import DEFAULT_MEAN_PATTERN
from polyrollup.types import SemanticType, TableSchema

__all__ = [
    "DEFAULT_MEAN_PATTERN",
    "MergeError",
    "RollupError",
    "SemanticType",
    "TableSchema",
    "TypeMismatch",
    "UnknownColumn",
    "aggregate",
    "columns_of_type",
    "table_schema",
]
