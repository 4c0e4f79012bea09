"""
Presence validators.

Rules about whether a value is there at all:
- not_null / null: identity check against None
- not_empty / empty: None, blank strings, empty collections and default
  values (0, False) count as empty

These are plain predicates registered through register_predicate(), the
same hook available to application code.
"""

from collections.abc import Sized
from decimal import Decimal
from numbers import Number
from typing import Any

from fluentrules.core.registry import register_predicate


def is_empty(value: Any) -> bool:
    """
    Check whether a value counts as empty.

    Args:
        value: Any value

    Returns:
        True for None, whitespace-only strings, empty collections and
        numeric / boolean defaults
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (bool, Number, Decimal)):
        return value == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


@register_predicate("not_null", "'{PropertyName}' must not be empty.")
def not_null(value, context) -> bool:
    return value is not None


@register_predicate("null", "'{PropertyName}' must be empty.")
def null(value, context) -> bool:
    return value is None


@register_predicate("not_empty", "'{PropertyName}' must not be empty.")
def not_empty(value, context) -> bool:
    return not is_empty(value)


@register_predicate("empty", "'{PropertyName}' must be empty.")
def empty(value, context) -> bool:
    return is_empty(value)
