# Overview: Pytest coverage for the shared number coercion helpers.

import pytest

from kitchen.validation import ValidationError, parse_number, parse_positive_number


@pytest.mark.parametrize("value,expected", [(3, 3.0), ("2.5", 2.5), (-1, -1.0), ("0", 0.0)])
def test_parse_number(value, expected):
    assert parse_number(value, "quantity") == expected


@pytest.mark.parametrize("value", [None, "", "abc", True, [], "NaN", "inf", "-Infinity", float("nan")])
def test_parse_number_rejects(value):
    with pytest.raises(ValidationError):
        parse_number(value, "quantity")


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError, match="quantity must be a finite number"):
        parse_number("nan", "quantity")


@pytest.mark.parametrize("value", [0, -0.5, "-3"])
def test_parse_positive_number_rejects(value):
    with pytest.raises(ValidationError, match="greater than zero"):
        parse_positive_number(value, "quantity")
