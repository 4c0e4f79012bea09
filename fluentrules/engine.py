"""
Validator - declaration surface and orchestrator for object validation.

Subclass Validator and declare rules in ``__init__``:

    class UserValidator(Validator):
        def __init__(self):
            super().__init__()
            self.rule_for("Name", lambda u: u.name).not_empty()
            self.rule_for_each("Orders", lambda u: u.orders).set_validator(OrderValidator())

    report = UserValidator().validate(user)

Validation never mutates the validator, so one instance can serve any
number of concurrent validate() calls once declaration is finished.
"""

from contextlib import contextmanager
from typing import Any, Callable, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Set, Union

from fluentrules.core.base import CascadeMode, ConfigurationError
from fluentrules.core.chain import (
    UNLESS,
    WHEN,
    ChainBase,
    Guard,
    IncludeChain,
    RuleBuilder,
    RuleChain,
    member_accessor,
)
from fluentrules.core.context import DEFAULT_RULE_SET, ValidationContext, normalize_rule_sets
from fluentrules.core.options import ValidatorOptions
from fluentrules.core.signatures import call_flexible
from fluentrules.results import ValidationReport
from shared.utils.logger import setup_logger

# Import validators to trigger registration
from fluentrules import validators  # noqa: F401

logger = setup_logger(__name__)


class ConditionBlock:
    """Returned by Validator.when()/unless() so an otherwise() block can follow"""

    def __init__(self, validator: "Validator", predicate: Callable[..., Any], polarity: str):
        self._validator = validator
        self._predicate = predicate
        self._polarity = polarity

    def otherwise(self, declare: Callable[..., Any]) -> None:
        """Declare chains that run when the original condition does not hold."""
        inverse = UNLESS if self._polarity == WHEN else WHEN
        self._validator._declare_guarded(self._predicate, inverse, declare)


class Validator:
    """
    Named, reusable collection of rule chains for one object type.

    Attributes:
        name: Validator name used in logs
        cascade_mode: Default cascade mode for this validator's chains;
                      None defers to the process-wide options
    """

    cascade_mode: Optional[CascadeMode] = None

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__
        self._chains: List[ChainBase] = []
        self._rule_set_scope: List[FrozenSet[str]] = [frozenset({DEFAULT_RULE_SET})]
        self._guard_scope: List[Guard] = []
        self._declared_rule_sets: Set[str] = {DEFAULT_RULE_SET}

    # Declaration API

    def rule_for(self, property_name: str, accessor: Optional[Callable[[Any], Any]] = None) -> RuleBuilder:
        """
        Start a chain for one property.

        Args:
            property_name: Name used in the property path (dot notation
                           allowed for nested members)
            accessor: Function reading the value from the instance; defaults
                      to attribute / key lookup of ``property_name``

        Returns:
            RuleBuilder for the new chain
        """
        return RuleBuilder(self._add_chain(property_name, accessor, is_collection=False))

    def rule_for_each(self, property_name: str, accessor: Optional[Callable[[Any], Any]] = None) -> RuleBuilder:
        """
        Start a chain evaluated once per element of a collection property.

        Failures are reported at ``property_name[index]``.
        """
        return RuleBuilder(self._add_chain(property_name, accessor, is_collection=True))

    def include(self, validator: Union["Validator", type]) -> None:
        """Run another validator for the same type as part of this one."""
        if isinstance(validator, type) and issubclass(validator, Validator):
            validator = validator()
        if not isinstance(validator, Validator):
            raise ConfigurationError(f"include() expects a Validator, got {type(validator).__name__}")
        if validator is self:
            raise ConfigurationError(f"{self.name} cannot include itself")
        if validator._includes(self):
            raise ConfigurationError(
                f"{self.name} cannot include {validator.name}: {validator.name} already includes {self.name}"
            )
        self._chains.append(IncludeChain(validator, self._rule_set_scope[-1], self._guard_scope))

    def rule_set(self, names: Union[str, Sequence[str]], declare: Callable[..., Any]) -> None:
        """
        Declare chains that only run when one of ``names`` is selected.

        Args:
            names: Rule-set name, comma separated names, or a list of names
            declare: Callable declaring the chains (receives the validator
                     if it takes an argument)

        Raises:
            ConfigurationError: If no name is given or nothing is declared
        """
        selected = normalize_rule_sets(names)
        if not selected:
            raise ConfigurationError(f"{self.name}: rule_set() requires at least one name")

        declared_before = len(self._chains)
        self._rule_set_scope.append(selected)
        try:
            call_flexible(declare, self)
        finally:
            self._rule_set_scope.pop()

        if len(self._chains) == declared_before:
            raise ConfigurationError(
                f"{self.name}: rule set {sorted(selected)} declares no rules"
            )
        self._declared_rule_sets |= selected

    def when(self, predicate: Callable[..., Any], declare: Callable[..., Any]) -> ConditionBlock:
        """Guard every chain declared inside ``declare`` with ``predicate``."""
        self._declare_guarded(predicate, WHEN, declare)
        return ConditionBlock(self, predicate, WHEN)

    def unless(self, predicate: Callable[..., Any], declare: Callable[..., Any]) -> ConditionBlock:
        """Skip every chain declared inside ``declare`` when ``predicate`` holds."""
        self._declare_guarded(predicate, UNLESS, declare)
        return ConditionBlock(self, predicate, UNLESS)

    # Introspection

    @property
    def chains(self) -> tuple:
        return tuple(self._chains)

    @property
    def rule_sets(self) -> Set[str]:
        """Names of every rule set declared on this validator"""
        return set(self._declared_rule_sets)

    # Execution

    def validate(
        self,
        instance: Any,
        rule_sets: Optional[Union[str, Iterable[str]]] = None,
        options: Optional[ValidatorOptions] = None
    ) -> ValidationReport:
        """
        Validate an object.

        Args:
            instance: Object to validate
            rule_sets: Rule sets to run; None runs the default set and
                       ``"*"`` runs everything. Unknown names select nothing.
            options: Options for this call; defaults to the process-wide ones

        Returns:
            ValidationReport with every failure in evaluation order

        Raises:
            ValueError: If ``instance`` is None
        """
        if instance is None:
            raise ValueError(f"{self.name}: cannot validate None")

        context = ValidationContext(instance, rule_sets, options)
        logger.debug(
            f"Validating {type(instance).__name__} with {self.name} "
            f"(rule_sets={sorted(context.rule_sets) if context.rule_sets else 'default'})"
        )

        self.validate_into(context, instance)

        report = ValidationReport(
            failures=tuple(context.failures),
            rule_sets_executed=tuple(context.rule_sets_executed),
        )
        logger.debug(f"{self.name} finished with {len(report)} failure(s)")
        return report

    def validate_into(self, context: ValidationContext, instance: Any) -> None:
        """
        Run this validator's selected chains inside an existing context.

        Used for nested, collection and included validators so that the
        path and rule-set selection carry through.
        """
        default_cascade = self.cascade_mode or context.options.default_cascade_mode
        for chain in self._chains:
            if not chain.always_selected:
                memberships = context.effective_rule_sets(chain.rule_sets)
                if not context.is_selected(memberships):
                    continue
                context.mark_executed(memberships)
            chain.evaluate(context, instance, default_cascade)

    # Internals

    def _add_chain(
        self,
        property_name: str,
        accessor: Optional[Callable[[Any], Any]],
        is_collection: bool
    ) -> RuleChain:
        if not property_name or not isinstance(property_name, str):
            raise ConfigurationError(f"{self.name}: property name must be a non-empty string")
        if accessor is not None and not callable(accessor):
            raise ConfigurationError(f"{self.name}: accessor for '{property_name}' is not callable")

        chain = RuleChain(
            property_name,
            accessor or member_accessor(property_name),
            self._rule_set_scope[-1],
            guards=self._guard_scope,
            is_collection=is_collection,
        )
        self._chains.append(chain)
        return chain

    def _includes(self, target: "Validator") -> bool:
        """Check whether ``target`` is reachable through include() chains."""
        pending = [self]
        seen: Set[int] = set()
        while pending:
            current = pending.pop()
            if current is target:
                return True
            if id(current) in seen:
                continue
            seen.add(id(current))
            pending.extend(
                chain.validator for chain in current._chains if isinstance(chain, IncludeChain)
            )
        return False

    def _declare_guarded(self, predicate: Callable[..., Any], polarity: str, declare: Callable[..., Any]) -> None:
        if not callable(predicate):
            raise ConfigurationError(f"{self.name}: {polarity}() expects a callable predicate")
        with self._guarded(predicate, polarity):
            call_flexible(declare, self)

    @contextmanager
    def _guarded(self, predicate: Callable[..., Any], polarity: str) -> Iterator[None]:
        self._guard_scope.append((predicate, polarity))
        try:
            yield
        finally:
            self._guard_scope.pop()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} chains={len(self._chains)}>"


class InlineValidator(Validator):
    """
    Validator declared by a function instead of a subclass.

    Usage:
        orders = InlineValidator(lambda v: v.rule_for("Id").greater_than(0))

    ``rule_sets`` places every chain declared outside an explicit
    rule_set() block in those sets instead of ``default``.
    """

    def __init__(
        self,
        declare: Callable[["Validator"], Any],
        name: Optional[str] = None,
        rule_sets: Optional[FrozenSet[str]] = None
    ):
        super().__init__(name=name or "InlineValidator")
        if rule_sets:
            self._rule_set_scope = [frozenset(rule_sets)]
            self._declared_rule_sets = set(rule_sets)
        call_flexible(declare, self)
