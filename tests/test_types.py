"""Tests for semantic type mapping."""

import polars as pl
import pytest

from polyrollup.types import (
    SemanticType,
    TableSchema,
    parse_type_label,
    semantic_type_of,
)


class TestSemanticTypeOf:
    """Test polars dtype -> semantic type mapping."""

    @pytest.mark.parametrize(
        "dtype",
        [pl.Int64(), pl.Int32(), pl.UInt8(), pl.UInt64(), pl.Float32(), pl.Float64()],
    )
    def test_integer_and_float_are_numeric(self, dtype):
        """Every integer and float dtype is numeric."""
        assert semantic_type_of(dtype) == SemanticType.NUMERIC

    def test_decimal_is_numeric(self):
        """Decimal is numeric."""
        assert semantic_type_of(pl.Decimal(10, 2)) == SemanticType.NUMERIC

    def test_date_is_date(self):
        """Date maps to date."""
        assert semantic_type_of(pl.Date()) == SemanticType.DATE

    def test_datetime_is_not_date(self):
        """Datetime has its own type, with or without a timezone."""
        assert semantic_type_of(pl.Datetime("us")) == SemanticType.DATETIME
        assert semantic_type_of(pl.Datetime("ms", "UTC")) == SemanticType.DATETIME

    def test_string_is_text(self):
        """String and its Utf8 alias are text."""
        assert semantic_type_of(pl.String()) == SemanticType.TEXT
        assert semantic_type_of(pl.Utf8()) == SemanticType.TEXT

    def test_categorical_and_enum_are_categorical(self):
        """Categorical and Enum are categorical."""
        assert semantic_type_of(pl.Categorical()) == SemanticType.CATEGORICAL
        assert semantic_type_of(pl.Enum(["a", "b"])) == SemanticType.CATEGORICAL

    def test_boolean_is_not_numeric(self):
        """Boolean is its own type."""
        assert semantic_type_of(pl.Boolean()) == SemanticType.BOOLEAN

    def test_duration(self):
        """Duration maps to duration."""
        assert semantic_type_of(pl.Duration("us")) == SemanticType.DURATION

    def test_nested_is_other(self):
        """Lists and structs fall back to other."""
        assert semantic_type_of(pl.List(pl.Int64())) == SemanticType.OTHER
        assert semantic_type_of(pl.Struct({"a": pl.Int64()})) == SemanticType.OTHER


class TestParseTypeLabel:
    """Test type label parsing."""

    def test_lowercase_label(self):
        assert parse_type_label("numeric") == SemanticType.NUMERIC

    def test_label_is_case_insensitive(self):
        assert parse_type_label("Date") == SemanticType.DATE
        assert parse_type_label(" TEXT ") == SemanticType.TEXT

    def test_unknown_label_returns_none(self):
        assert parse_type_label("POSIXct") is None

    def test_semantic_type_is_a_string(self):
        """Enum members can be passed wherever a label string is expected."""
        assert isinstance(SemanticType.NUMERIC, str)
        assert str(SemanticType.NUMERIC) == "numeric"
        assert parse_type_label(SemanticType.DATE) == SemanticType.DATE


class TestTableSchema:
    """Test TableSchema built from a DataFrame."""

    def test_from_frame_preserves_column_order(self):
        df = pl.DataFrame({"b": [1], "a": ["x"], "c": [1.5]})
        schema = TableSchema.from_frame(df)
        assert list(schema.columns) == ["b", "a", "c"]
        assert schema.columns["a"] == SemanticType.TEXT

    def test_has_column(self):
        schema = TableSchema({"a": SemanticType.NUMERIC})
        assert schema.has_column("a")
        assert not schema.has_column("b")

    def test_get_column_type(self):
        schema = TableSchema({"a": SemanticType.NUMERIC})
        assert schema.get_column_type("a") == SemanticType.NUMERIC
        assert schema.get_column_type("b") is None

    def test_columns_of(self):
        schema = TableSchema(
            {
                "x": SemanticType.NUMERIC,
                "d": SemanticType.DATE,
                "y": SemanticType.NUMERIC,
            }
        )
        assert schema.columns_of(SemanticType.NUMERIC) == ["x", "y"]
        assert schema.columns_of(SemanticType.BOOLEAN) == []
