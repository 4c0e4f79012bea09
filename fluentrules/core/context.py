"""
Per-call validation state.

A ValidationContext is created for every top-level validate() call and
threaded through nested and collection validators. It carries the path
accumulator, the rule-set selection and the growing failure list, so
validators themselves stay free of per-call state.
"""

from contextlib import contextmanager
from typing import Any, FrozenSet, Iterable, Iterator, List, Optional, Union

from fluentrules.core.base import ValidationFailure
from fluentrules.core.options import ValidatorOptions, get_options

DEFAULT_RULE_SET = "default"
ALL_RULE_SETS = "*"
DEFAULT_ONLY = frozenset({DEFAULT_RULE_SET})

PathSegment = Union[str, int]


def render_path(segments: Iterable[PathSegment]) -> str:
    """
    Join path segments into ``orders[1].address.town`` form.

    Args:
        segments: Property names and collection indexes

    Returns:
        Rendered property path
    """
    rendered = ""
    for segment in segments:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        elif rendered:
            rendered += f".{segment}"
        else:
            rendered = segment
    return rendered


def normalize_rule_sets(rule_sets: Optional[Iterable[str]]) -> Optional[FrozenSet[str]]:
    """
    Normalise a rule-set selection.

    Accepts None, a single (optionally comma separated) string or an
    iterable of names. Empty selections collapse to None.
    """
    if rule_sets is None:
        return None
    if isinstance(rule_sets, str):
        rule_sets = rule_sets.split(",")
    names = frozenset(name.strip() for name in rule_sets if name and name.strip())
    return names or None


class ValidationContext:
    """
    Mutable state for one validation run.

    Attributes:
        root_instance: Object passed to the top-level validate() call
        rule_sets: Selected rule-set names, or None for the default set
        options: Process-wide options captured at the start of the call
        failures: Failures in evaluation order
    """

    def __init__(
        self,
        instance: Any,
        rule_sets: Optional[Iterable[str]] = None,
        options: Optional[ValidatorOptions] = None
    ):
        self.root_instance = instance
        self.rule_sets = normalize_rule_sets(rule_sets)
        self.options = options or get_options()
        self.failures: List[ValidationFailure] = []
        self.rule_sets_executed: List[str] = []
        self._path: List[PathSegment] = []
        self._instances: List[Any] = [instance]
        self._inherited: List[FrozenSet[str]] = [DEFAULT_ONLY]

    @property
    def instance_to_validate(self) -> Any:
        """Object owned by the validator currently running"""
        return self._instances[-1]

    @property
    def path(self) -> tuple:
        return tuple(self._path)

    @property
    def depth(self) -> int:
        return len(self._path)

    def property_path(self, *segments: PathSegment) -> str:
        """Render the current path extended by ``segments``."""
        return render_path([*self._path, *segments])

    @contextmanager
    def enter(self, *segments: PathSegment) -> Iterator["ValidationContext"]:
        """
        Push path segments for the duration of a nested evaluation.

        The path is restored on exit even if a predicate raises.
        """
        depth = len(self._path)
        self._path.extend(segments)
        try:
            yield self
        finally:
            del self._path[depth:]

    @contextmanager
    def validating(self, instance: Any) -> Iterator["ValidationContext"]:
        """
        Make ``instance`` the object seen by guards of a child validator.

        Child validators see the caller's selection as is; rule sets
        inherited through include() do not leak into them.
        """
        self._instances.append(instance)
        self._inherited.append(DEFAULT_ONLY)
        try:
            yield self
        finally:
            self._inherited.pop()
            self._instances.pop()

    @contextmanager
    def inheriting(self, memberships: FrozenSet[str]) -> Iterator["ValidationContext"]:
        """
        Let default chains of an included validator stand in ``memberships``.

        An include declared inside ``rule_set("A")`` makes the included
        validator's default chains members of ``A`` for this evaluation.
        """
        self._inherited.append(memberships)
        try:
            yield self
        finally:
            self._inherited.pop()

    def effective_rule_sets(self, memberships: FrozenSet[str]) -> FrozenSet[str]:
        """Membership of a chain once inherited rule sets are applied."""
        if memberships == DEFAULT_ONLY:
            return self._inherited[-1]
        return memberships

    def is_selected(self, memberships: FrozenSet[str]) -> bool:
        """
        Check whether a chain belonging to ``memberships`` should run.

        No selection runs the default set; ``*`` runs everything;
        otherwise the chain must belong to a selected set. Unknown
        names simply select nothing.
        """
        if self.rule_sets is None:
            return DEFAULT_RULE_SET in memberships
        if ALL_RULE_SETS in self.rule_sets:
            return True
        return bool(self.rule_sets & memberships)

    def mark_executed(self, memberships: FrozenSet[str]) -> None:
        for name in sorted(memberships):
            if name not in self.rule_sets_executed and self._selects(name):
                self.rule_sets_executed.append(name)

    def add_failure(self, failure: ValidationFailure) -> None:
        self.failures.append(failure)

    def _selects(self, name: str) -> bool:
        if self.rule_sets is None:
            return name == DEFAULT_RULE_SET
        return ALL_RULE_SETS in self.rule_sets or name in self.rule_sets
