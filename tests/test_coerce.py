"""Tests for argument coercion helpers."""

from __future__ import annotations

import pytest

from cmfuncs.coerce import (
    is_numeric,
    looks_numeric,
    parse_boolean,
    parse_integer,
    parse_number,
    require_array,
    require_hash,
    require_string,
    to_dsl_string,
)
from cmfuncs.errors import ArgumentTypeError, InvalidArgumentError, InvalidStepError


class TestPredicates:
    def test_is_numeric_excludes_bool(self) -> None:
        assert is_numeric(1)
        assert is_numeric(1.5)
        assert not is_numeric(True)
        assert not is_numeric("1")

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1", True),
            ("-2", True),
            ("3.14", True),
            ("1.", False),
            ("abc", False),
            ("\u0661\u0662", False),
        ],
    )
    def test_looks_numeric(self, value: str, expected: bool) -> None:
        assert looks_numeric(value) is expected


class TestRequire:
    def test_passes_value_through(self) -> None:
        assert require_string("f", "x") == "x"
        assert require_array("f", [1]) == [1]
        assert require_hash("f", {"a": 1}) == {"a": 1}

    def test_message_names_expected_type(self) -> None:
        with pytest.raises(ArgumentTypeError) as exc_info:
            require_array("f", "x")
        assert str(exc_info.value) == "f(): Requires an array type to work with"

    def test_custom_description(self) -> None:
        with pytest.raises(ArgumentTypeError, match="Requires a thing to work with"):
            require_hash("f", [], "a thing")


class TestParseBoolean:
    @pytest.mark.parametrize("word", ["1", "t", "y", "true", "yes", "TRUE", "Yes"])
    def test_true_words(self, word: str) -> None:
        assert parse_boolean("f", word) is True

    @pytest.mark.parametrize(
        "word", ["", "0", "f", "n", "false", "no", "undef", "undefined", "False"]
    )
    def test_false_words(self, word: str) -> None:
        assert parse_boolean("f", word) is False

    def test_native_booleans(self) -> None:
        assert parse_boolean("f", True) is True
        assert parse_boolean("f", False) is False

    def test_unknown_word(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Unknown type of boolean"):
            parse_boolean("f", "maybe")

    def test_wrong_type(self) -> None:
        with pytest.raises(ArgumentTypeError):
            parse_boolean("f", 1)


class TestParseInteger:
    def test_values(self) -> None:
        assert parse_integer("f", 3) == 3
        assert parse_integer("f", " -7 ") == -7

    def test_float_rejected_with_given_error(self) -> None:
        with pytest.raises(InvalidStepError):
            parse_integer("f", 1.5, error=InvalidStepError)

    def test_non_negative(self) -> None:
        with pytest.raises(InvalidArgumentError, match="non-negative"):
            parse_integer("f", "-1", non_negative=True)

    @pytest.mark.parametrize("value", [True, None, [1]])
    def test_wrong_type(self, value) -> None:
        with pytest.raises(ArgumentTypeError):
            parse_integer("f", value)


class TestParseNumber:
    def test_values(self) -> None:
        assert parse_number("f", "2") == 2
        assert parse_number("f", "-2.5") == -2.5
        assert parse_number("f", 7) == 7

    def test_invalid_string(self) -> None:
        with pytest.raises(InvalidArgumentError):
            parse_number("f", "2x")

    def test_non_ascii_digits_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            parse_number("f", "\uff12")

    def test_wrong_type(self) -> None:
        with pytest.raises(ArgumentTypeError):
            parse_number("f", None)


def test_to_dsl_string() -> None:
    """Scalars render the way the DSL prints them."""
    assert to_dsl_string(None) == ""
    assert to_dsl_string(True) == "true"
    assert to_dsl_string(False) == "false"
    assert to_dsl_string(12) == "12"
    assert to_dsl_string("x") == "x"
