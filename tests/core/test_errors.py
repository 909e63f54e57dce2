"""Tests for transmute.core.errors module."""

import pytest

from transmute.core.errors import (
    ConfigError,
    Direction,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    InvalidTransformerError,
    ParseError,
    TransformError,
    TransmuteError,
    UnwrapError,
    categorize_error,
)


class TestDirection:
    def test_reversed(self):
        assert Direction.FORWARD.reversed() is Direction.BACKWARD
        assert Direction.BACKWARD.reversed() is Direction.FORWARD


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_empty_context(self):
        assert ErrorContext().to_dict() == {}

    def test_set_fields_only(self):
        ctx = ErrorContext(transformer="[int<->str]", direction=Direction.BACKWARD, index=1)
        assert ctx.to_dict() == {
            "transformer": "[int<->str]",
            "direction": "BACKWARD",
            "index": 1,
        }

    def test_index_zero_is_kept(self):
        assert ErrorContext(index=0).to_dict() == {"index": 0}

    def test_metadata_merged(self):
        ctx = ErrorContext(transformer="cents")
        ctx.metadata["unit"] = "USD"
        assert ctx.to_dict() == {"transformer": "cents", "unit": "USD"}


class TestTransmuteError:
    """Test the base error."""

    def test_defaults(self):
        error = TransmuteError("Something went wrong")
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"
        assert error.category == ErrorCategory.INTERNAL
        assert error.cause is None

    def test_cause_is_chained(self):
        cause = ValueError("inner")
        error = TransmuteError("outer", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_with_context_known_and_extra_keys(self):
        error = TransmuteError("failed").with_context(transformer="percent", unit="bp")
        assert error.context.transformer == "percent"
        assert error.context.metadata == {"unit": "bp"}

    def test_with_context_returns_self(self):
        error = TransmuteError("failed")
        assert error.with_context(index=2) is error

    def test_to_dict(self):
        error = TransmuteError(
            "failed",
            category=ErrorCategory.PARSE,
            context=ErrorContext(transformer="t"),
            cause=KeyError("k"),
        )
        d = error.to_dict()
        assert d["error_type"] == "TransmuteError"
        assert d["category"] == "PARSE"
        assert d["context"] == {"transformer": "t"}
        assert "k" in d["cause"]

    def test_repr(self):
        assert repr(TransmuteError("x")) == "TransmuteError('x', category=INTERNAL)"


class TestSubclasses:
    def test_transform_error_carries_value_and_direction(self):
        error = TransformError("not an integer", value="2.5", direction=Direction.BACKWARD)
        assert error.category == ErrorCategory.TRANSFORM
        assert error.value == "2.5"
        assert error.context.direction is Direction.BACKWARD
        d = error.to_dict()
        assert d["value"] == "'2.5'"
        assert d["direction"] == "BACKWARD"

    def test_parse_error_is_transform_error(self):
        error = ParseError("bad")
        assert isinstance(error, TransformError)
        assert error.category == ErrorCategory.PARSE

    def test_invalid_transformer_error_category(self):
        assert InvalidTransformerError("x").category == ErrorCategory.VALIDATION

    def test_unwrap_error_keeps_error_value(self):
        error = UnwrapError("code-17")
        assert error.error == "code-17"
        assert "code-17" in error.message

    def test_invalid_config_error(self):
        error = InvalidConfigError("log_level", "LOUD")
        assert isinstance(error, ConfigError)
        assert error.key == "log_level"
        assert error.category == ErrorCategory.CONFIG
        assert "LOUD" in str(error)


class TestCategorizeError:
    @pytest.mark.parametrize(
        "error, expected",
        [
            (ParseError("x"), ErrorCategory.PARSE),
            (ValueError("x"), ErrorCategory.TRANSFORM),
            (KeyError("x"), ErrorCategory.TRANSFORM),
            (ZeroDivisionError(), ErrorCategory.TRANSFORM),
            (RuntimeError("x"), ErrorCategory.UNKNOWN),
            ("plain string", ErrorCategory.UNKNOWN),
        ],
    )
    def test_categorize(self, error, expected):
        assert categorize_error(error) == expected
