"""
Tests for the built-in rules.
"""

import pytest

from fluentrules import ConfigurationError
from fluentrules.core.context import ValidationContext
from fluentrules.core.registry import create_rule
from fluentrules.validators.null_validators import is_empty


@pytest.fixture
def context():
    return ValidationContext(object())


@pytest.mark.parametrize("value, expected", [
    (None, True),
    ("", True),
    ("   ", True),
    ("x", False),
    ([], True),
    ([0], False),
    ({}, True),
    (0, True),
    (0.0, True),
    (3, False),
    (False, True),
    (True, False),
    (object(), False),
])
def test_is_empty(value, expected):
    assert is_empty(value) is expected


@pytest.mark.parametrize("name, args, value, expected", [
    ("not_null", (), None, False),
    ("not_null", (), "", True),
    ("null", (), None, True),
    ("not_empty", (), "", False),
    ("empty", (), [], True),
    ("greater_than", (5,), 6, True),
    ("greater_than", (5,), 5, False),
    ("greater_than", (5,), None, True),
    ("greater_than_or_equal", (5,), 5, True),
    ("less_than", (100,), 100, False),
    ("less_than_or_equal", (100,), 100, True),
    ("equal", ("a",), "a", True),
    ("not_equal", ("a",), "a", False),
    ("inclusive_between", (1, 3), 3, True),
    ("exclusive_between", (1, 3), 3, False),
    ("length", (0, 3), "abcd", False),
    ("length_between", (2, 3), "ab", True),
    ("min_length", (2,), "a", False),
    ("max_length", (2,), [1, 2], True),
    ("matches", (r"^[A-Z]{3}-\d{4}$",), "ABC-1234", True),
    ("matches", (r"^[A-Z]{3}-\d{4}$",), "INVALID", False),
    ("email_address", (), "a@b.com", True),
    ("email_address", (), "not-an-email", False),
])
def test_builtin_rule(context, name, args, value, expected):
    assert create_rule(name, *args).is_valid(value, context) is expected


def test_error_codes():
    assert create_rule("not_empty").code == "NotEmptyValidator"
    assert create_rule("not_null").code == "NotNullValidator"
    assert create_rule("length", 0, 10).code == "LengthValidator"
    assert create_rule("less_than", 1).code == "LessThanValidator"


def test_length_placeholders_include_total_length():
    rule = create_rule("length", 1, 3)

    assert rule.failure_placeholders("abcd") == {"MinLength": 1, "MaxLength": 3, "TotalLength": 4}


@pytest.mark.parametrize("name, args", [
    ("greater_than", (None,)),
    ("inclusive_between", (5, 1)),
    ("length", (5, 1)),
    ("length", (-1, 1)),
    ("matches", ("[unclosed",)),
])
def test_invalid_rule_arguments(name, args):
    with pytest.raises(ConfigurationError):
        create_rule(name, *args)
