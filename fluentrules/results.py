"""
Validation report returned by Validator.validate().
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from fluentrules.core.base import Severity, ValidationFailure


@dataclass(frozen=True)
class ValidationReport:
    """
    Ordered failures of one validation run.

    Failures appear in the order rules were evaluated. The report is
    valid when it holds no failures.

    Usage:
        report = UserValidator().validate(user)
        if not report.is_valid:
            print(report.to_string())
    """
    failures: Tuple[ValidationFailure, ...] = ()
    rule_sets_executed: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def is_valid(self) -> bool:
        return not self.failures

    @property
    def errors(self) -> List[ValidationFailure]:
        """Failures with ERROR severity"""
        return [f for f in self.failures if f.severity == Severity.ERROR]

    def to_string(self, separator: str = "\n") -> str:
        """
        Render one ``"<path>: <message>"`` line per failure.

        Args:
            separator: Text placed between failures

        Returns:
            Flattened report text (empty when valid)
        """
        return separator.join(str(failure) for failure in self.failures)

    def to_dictionary(self) -> Dict[str, List[str]]:
        """
        Group messages by property path.

        Returns:
            Mapping of property path to its messages, in evaluation order
        """
        grouped: Dict[str, List[str]] = {}
        for failure in self.failures:
            grouped.setdefault(failure.property_path, []).append(failure.message)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'is_valid': self.is_valid,
            'failures': [f.to_dict() for f in self.failures],
            'rule_sets_executed': list(self.rule_sets_executed),
        }

    def __len__(self) -> int:
        return len(self.failures)

    def __iter__(self):
        return iter(self.failures)

    def __str__(self) -> str:
        return self.to_string()
