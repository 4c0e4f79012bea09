"""
Rule engine core module.

Contains base classes, the rule registry, chains, context and message
resolution used by validators.
"""

from fluentrules.core.base import (
    BaseRule,
    CascadeMode,
    ConfigurationError,
    FluentRulesError,
    Severity,
    ValidationFailure,
)
from fluentrules.core.registry import (
    RULE_REGISTRY,
    register_rule,
    register_predicate,
    get_rule,
    list_rules,
    is_registered,
)
from fluentrules.core.context import ValidationContext, DEFAULT_RULE_SET, ALL_RULE_SETS
from fluentrules.core.messages import LanguageManager, MessageFormatter
from fluentrules.core.options import ValidatorOptions, configure_options, get_options, reset_options

__all__ = [
    'BaseRule',
    'CascadeMode',
    'ConfigurationError',
    'FluentRulesError',
    'Severity',
    'ValidationFailure',
    'RULE_REGISTRY',
    'register_rule',
    'register_predicate',
    'get_rule',
    'list_rules',
    'is_registered',
    'ValidationContext',
    'DEFAULT_RULE_SET',
    'ALL_RULE_SETS',
    'LanguageManager',
    'MessageFormatter',
    'ValidatorOptions',
    'configure_options',
    'get_options',
    'reset_options',
]
