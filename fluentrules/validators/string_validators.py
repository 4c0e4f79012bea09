"""
String and length validators.

- length / length_between: length within [min, max]
- min_length / max_length: one-sided length bounds
- matches: regular expression
- email_address: basic email format

Length rules accept any sized value (strings, lists, dicts). None passes.
"""

import re
from typing import Any, Dict, Optional, Union

from fluentrules.core.base import BaseRule, ConfigurationError
from fluentrules.core.registry import register_rule

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class LengthValidator(BaseRule):
    """
    Validate string or collection length.

    Example:
        rule_for("Name").length(0, 255)
    """

    default_message = (
        "'{PropertyName}' must be between {MinLength} and {MaxLength} characters. "
        "You entered {TotalLength} characters."
    )

    def __init__(self, min_length: int = 0, max_length: Optional[int] = None):
        if min_length < 0:
            raise ConfigurationError("Minimum length must not be negative")
        if max_length is not None and max_length < min_length:
            raise ConfigurationError(
                f"Maximum length {max_length} is below minimum length {min_length}"
            )
        self.min_length = min_length
        self.max_length = max_length

    def is_valid(self, value, context) -> bool:
        if value is None:
            return True
        length = len(value)
        if length < self.min_length:
            return False
        return self.max_length is None or length <= self.max_length

    def placeholders(self) -> Dict[str, Any]:
        return {"MinLength": self.min_length, "MaxLength": self.max_length, "TotalLength": None}

    def failure_placeholders(self, value: Any) -> Dict[str, Any]:
        placeholders = self.placeholders()
        if value is not None:
            placeholders["TotalLength"] = len(value)
        return placeholders


register_rule("length")(LengthValidator)
register_rule("length_between")(LengthValidator)


@register_rule("min_length")
class MinimumLengthValidator(LengthValidator):
    default_message = (
        "The length of '{PropertyName}' must be at least {MinLength} characters. "
        "You entered {TotalLength} characters."
    )

    def __init__(self, min_length: int):
        super().__init__(min_length, None)


@register_rule("max_length")
class MaximumLengthValidator(LengthValidator):
    default_message = (
        "The length of '{PropertyName}' must be {MaxLength} characters or fewer. "
        "You entered {TotalLength} characters."
    )

    def __init__(self, max_length: int):
        super().__init__(0, max_length)


@register_rule("matches")
class RegularExpressionValidator(BaseRule):
    """
    Validate against a regular expression (``re.search`` semantics).

    Example:
        rule_for("Code").matches(r"^[A-Z]{3}-\\d{4}$")
    """

    default_message = "'{PropertyName}' is not in the correct format."

    def __init__(self, pattern: Union[str, re.Pattern], flags: int = 0):
        if isinstance(pattern, str):
            try:
                pattern = re.compile(pattern, flags)
            except re.error as e:
                raise ConfigurationError(f"Invalid regex pattern {pattern!r}: {e}") from e
        self.pattern = pattern

    def is_valid(self, value, context) -> bool:
        if value is None:
            return True
        return self.pattern.search(str(value)) is not None

    def placeholders(self) -> Dict[str, Any]:
        return {"RegularExpression": self.pattern.pattern}


@register_rule("email_address")
class EmailValidator(BaseRule):
    default_message = "'{PropertyName}' is not a valid email address."

    def is_valid(self, value, context) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None
