"""
fluentrules - declarative object validation.

Main components:
- Validator: declare rule chains for a type and validate instances
- ValidationReport: ordered failures with property paths and messages
- Built-in rules: presence, comparison, length, regex and email rules
- register_rule / register_predicate: add new rules to the builder API

Usage:
    from fluentrules import Validator

    class UserValidator(Validator):
        def __init__(self):
            super().__init__()
            self.rule_for("Name", lambda u: u.name).not_empty().with_message("Name can not be empty!")
            self.rule_for("Age", lambda u: u.age).greater_than(5).less_than(100)

    report = UserValidator().validate(user)
    if not report.is_valid:
        print(report.to_string())
"""

__version__ = "1.0.0"

from fluentrules.engine import Validator, InlineValidator
from fluentrules.results import ValidationReport
from fluentrules.core.base import (
    BaseRule,
    CascadeMode,
    ConfigurationError,
    FluentRulesError,
    Severity,
    ValidationFailure,
)
from fluentrules.core.chain import RuleBuilder
from fluentrules.core.context import ValidationContext
from fluentrules.core.messages import LanguageManager
from fluentrules.core.options import ValidatorOptions, configure_options, get_options
from fluentrules.core.registry import register_rule, register_predicate, RULE_REGISTRY

__all__ = [
    'Validator',
    'InlineValidator',
    'ValidationReport',
    'BaseRule',
    'CascadeMode',
    'ConfigurationError',
    'FluentRulesError',
    'Severity',
    'ValidationFailure',
    'RuleBuilder',
    'ValidationContext',
    'LanguageManager',
    'ValidatorOptions',
    'configure_options',
    'get_options',
    'register_rule',
    'register_predicate',
    'RULE_REGISTRY',
]
