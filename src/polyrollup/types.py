"""Semantic column types and the schema view of a table."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import polars as pl


class SemanticType(str, Enum):
    """Semantic type tag carried by every column of a table."""

    NUMERIC = "numeric"
    DATE = "date"
    DATETIME = "datetime"
    DURATION = "duration"
    TIME = "time"
    TEXT = "text"
    CATEGORICAL = "categorical"
    BOOLEAN = "boolean"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


# Exact base dtype -> semantic type. Numeric dtypes are handled separately.
_BASE_TYPE_MAP: dict[type[pl.DataType], SemanticType] = {
    pl.Date: SemanticType.DATE,
    pl.Datetime: SemanticType.DATETIME,
    pl.Duration: SemanticType.DURATION,
    pl.Time: SemanticType.TIME,
    pl.String: SemanticType.TEXT,
    pl.Categorical: SemanticType.CATEGORICAL,
    pl.Enum: SemanticType.CATEGORICAL,
    pl.Boolean: SemanticType.BOOLEAN,
}


def semantic_type_of(dtype: pl.DataType) -> SemanticType:
    """Map a polars dtype to its semantic type."""
    if dtype.is_numeric():
        return SemanticType.NUMERIC
    return _BASE_TYPE_MAP.get(dtype.base_type(), SemanticType.OTHER)


def parse_type_label(label: str) -> Optional[SemanticType]:
    """Resolve a type label such as "numeric" or "Date", or None if unknown."""
    try:
        return SemanticType(label.strip().lower())
    except ValueError:
        return None


@dataclass
class TableSchema:
    """Semantic view of a table: column name -> semantic type, in column order."""

    columns: dict[str, SemanticType] = field(default_factory=dict)

    @classmethod
    def from_frame(cls, frame: pl.DataFrame) -> TableSchema:
        return cls(
            {name: semantic_type_of(dtype) for name, dtype in frame.schema.items()}
        )

    def has_column(self, name: str) -> bool:
        """Check if a column exists."""
        return name in self.columns

    def get_column_type(self, name: str) -> Optional[SemanticType]:
        """Get the semantic type of a column, or None if not found."""
        return self.columns.get(name)

    def columns_of(self, semantic_type: SemanticType) -> list[str]:
        """Names of the columns tagged exactly with ``semantic_type``."""
        return [name for name, tag in self.columns.items() if tag == semantic_type]
