"""
Built-in rules.

Organised by category:
- null_validators: presence checks (not_null, not_empty, ...)
- comparison_validators: bounds and equality
- string_validators: length, regex and email

All rules are registered via the same decorators available to
application code.
"""

# Import all rule modules to trigger registration
from fluentrules.validators import null_validators
from fluentrules.validators import comparison_validators
from fluentrules.validators import string_validators

__all__ = ['null_validators', 'comparison_validators', 'string_validators']
