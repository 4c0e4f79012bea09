"""
Base classes and data models for the rule engine.

This module provides the foundation for all rules:
- BaseRule: Abstract base class for every atomic rule
- ValidationFailure: Standard failure record
- Severity: Severity levels
- CascadeMode: Per-chain execution policy
- FluentRulesError / ConfigurationError: Authoring errors
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TYPE_CHECKING
from dataclasses import dataclass, field as dataclass_field
from enum import Enum

if TYPE_CHECKING:
    from fluentrules.core.context import ValidationContext


class Severity(str, Enum):
    """Severity levels for validation failures"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class CascadeMode(str, Enum):
    """
    How a rule chain proceeds after a failing rule.

    STOP stops at the first failure for the property,
    CONTINUE evaluates every rule and reports each failure.
    """
    STOP = "stop"
    CONTINUE = "continue"

    @classmethod
    def parse(cls, value: Any) -> "CascadeMode":
        """Coerce a string or enum member into a CascadeMode."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown cascade mode '{value}'. Expected one of: "
                f"{', '.join(m.value for m in cls)}"
            )


class FluentRulesError(Exception):
    """Base exception for the rule engine"""
    pass


class ConfigurationError(FluentRulesError):
    """
    Raised while a validator is being declared.

    Signals an authoring bug (bad template, unknown rule, empty rule set)
    rather than bad input data. Never raised by validate().
    """
    pass


@dataclass(frozen=True)
class ValidationFailure:
    """
    A single failed rule.

    Failures are data: the engine collects them and never raises them.
    """
    property_path: str
    message: str
    attempted_value: Any = None
    error_code: Optional[str] = None
    severity: Severity = Severity.ERROR
    placeholders: Dict[str, Any] = dataclass_field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'property_path': self.property_path,
            'message': self.message,
            'attempted_value': self.attempted_value,
            'error_code': self.error_code,
            'severity': self.severity.value,
        }

    def __str__(self) -> str:
        return f"{self.property_path}: {self.message}"


class BaseRule(ABC):
    """
    Abstract base class for all atomic rules.

    A rule checks one value and describes how its failure should read.
    Custom rules inherit from this class, implement is_valid() and are
    registered by name so that they are reachable from the builder API.

    Example:
        @register_rule("even")
        class EvenRule(BaseRule):
            default_message = "'{PropertyName}' must be even."

            def is_valid(self, value, context):
                return value is None or value % 2 == 0
    """

    #: Template used when neither an override nor a catalog entry exists
    default_message: str = "'{PropertyName}' is not valid."

    #: Error code; defaults to the class name
    error_code: Optional[str] = None

    @property
    def code(self) -> str:
        return self.error_code or self.__class__.__name__

    @abstractmethod
    def is_valid(self, value: Any, context: "ValidationContext") -> bool:
        """
        Check a single value.

        Args:
            value: Value of the property (or collection element)
            context: Active validation context

        Returns:
            True when the value satisfies the rule
        """
        pass

    def placeholders(self) -> Dict[str, Any]:
        """
        Rule-specific placeholder values for message templates.

        Returns:
            Mapping of placeholder name to value
        """
        return {}

    def failure_placeholders(self, value: Any) -> Dict[str, Any]:
        """
        Placeholder values for a failure of ``value``.

        Override when a placeholder depends on the value (e.g. its length);
        the name must still be listed by placeholders().
        """
        return self.placeholders()

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.placeholders().items())
        return f"{self.__class__.__name__}({args})"
