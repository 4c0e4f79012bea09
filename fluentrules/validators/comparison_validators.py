"""
Comparison validators.

Validators that compare a value against fixed bounds:
- equal / not_equal
- greater_than / greater_than_or_equal
- less_than / less_than_or_equal
- inclusive_between / exclusive_between

A None value passes every comparison; pair with not_null() to require it.
"""

import operator
from typing import Any, Callable, Dict

from fluentrules.core.base import BaseRule, ConfigurationError
from fluentrules.core.registry import register_rule


class ComparisonValidator(BaseRule):
    """Compare the value against a single operand"""

    comparator: Callable[[Any, Any], bool] = operator.eq

    def __init__(self, value_to_compare: Any):
        if value_to_compare is None:
            raise ConfigurationError(f"{self.__class__.__name__} requires a value to compare against")
        self.value_to_compare = value_to_compare

    def is_valid(self, value, context) -> bool:
        if value is None:
            return True
        return bool(type(self).comparator(value, self.value_to_compare))

    def placeholders(self) -> Dict[str, Any]:
        return {"ComparisonValue": self.value_to_compare}


@register_rule("greater_than")
class GreaterThanValidator(ComparisonValidator):
    comparator = operator.gt
    default_message = "'{PropertyName}' must be greater than '{ComparisonValue}'."


@register_rule("greater_than_or_equal")
class GreaterThanOrEqualValidator(ComparisonValidator):
    comparator = operator.ge
    default_message = "'{PropertyName}' must be greater than or equal to '{ComparisonValue}'."


@register_rule("less_than")
class LessThanValidator(ComparisonValidator):
    comparator = operator.lt
    default_message = "'{PropertyName}' must be less than '{ComparisonValue}'."


@register_rule("less_than_or_equal")
class LessThanOrEqualValidator(ComparisonValidator):
    comparator = operator.le
    default_message = "'{PropertyName}' must be less than or equal to '{ComparisonValue}'."


@register_rule("equal")
class EqualValidator(ComparisonValidator):
    comparator = operator.eq
    default_message = "'{PropertyName}' must be equal to '{ComparisonValue}'."


@register_rule("not_equal")
class NotEqualValidator(ComparisonValidator):
    comparator = operator.ne
    default_message = "'{PropertyName}' must not be equal to '{ComparisonValue}'."


class RangeValidator(BaseRule):
    """Check that the value lies between two bounds"""

    inclusive = True

    def __init__(self, from_value: Any, to_value: Any):
        if from_value is None or to_value is None:
            raise ConfigurationError(f"{self.__class__.__name__} requires both bounds")
        if to_value < from_value:
            raise ConfigurationError(
                f"{self.__class__.__name__}: upper bound {to_value!r} is below lower bound {from_value!r}"
            )
        self.from_value = from_value
        self.to_value = to_value

    def is_valid(self, value, context) -> bool:
        if value is None:
            return True
        if self.inclusive:
            return self.from_value <= value <= self.to_value
        return self.from_value < value < self.to_value

    def placeholders(self) -> Dict[str, Any]:
        return {"From": self.from_value, "To": self.to_value}


@register_rule("inclusive_between")
class InclusiveBetweenValidator(RangeValidator):
    inclusive = True
    default_message = "'{PropertyName}' must be between {From} and {To}. You entered {PropertyValue}."


@register_rule("exclusive_between")
class ExclusiveBetweenValidator(RangeValidator):
    inclusive = False
    default_message = (
        "'{PropertyName}' must be between {From} and {To} (exclusive). You entered {PropertyValue}."
    )
