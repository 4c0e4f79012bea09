"""
Rule chains and the fluent builder used to declare them.

A RuleChain binds an ordered list of components to one property:
- RuleComponent: an atomic rule plus its message / code / severity options
- ChildValidatorComponent: delegation to a nested validator
- ForEachComponent: per-element rules attached to a collection-level chain

RuleBuilder is the handle returned by ``Validator.rule_for()``; each method
mutates the chain it wraps and returns the builder for chaining.
"""

from collections.abc import Mapping
from typing import Any, Callable, FrozenSet, List, Optional, Tuple, Union, TYPE_CHECKING

from fluentrules.core.base import (
    BaseRule,
    CascadeMode,
    ConfigurationError,
    Severity,
    ValidationFailure,
)
from fluentrules.core.context import ValidationContext
from fluentrules.core.messages import (
    COLLECTION_PLACEHOLDERS,
    STANDARD_PLACEHOLDERS,
    MessageFormatter,
    check_template,
    resolve_message,
)
from fluentrules.core.registry import PredicateValidator, create_rule, is_registered
from fluentrules.core.signatures import call_flexible

if TYPE_CHECKING:
    from fluentrules.engine import Validator

WHEN = "when"
UNLESS = "unless"

Guard = Tuple[Callable[..., Any], str]
MessageSource = Union[str, Callable[..., Any]]


def member_accessor(property_name: str) -> Callable[[Any], Any]:
    """
    Build an accessor for a property name.

    Supports nested names in dot notation (``address.town``). Mappings are
    read by key, other objects by attribute; a missing or None step yields
    None instead of raising.
    """
    keys = property_name.split(".")

    def access(instance: Any) -> Any:
        value = instance
        for key in keys:
            if value is None:
                return None
            if isinstance(value, Mapping):
                value = value.get(key)
            else:
                value = getattr(value, key, None)
        return value

    return access


class ChainBase:
    """Shared guard and rule-set handling for everything a validator runs"""

    #: Skip the rule-set filter and leave selection to the chain itself
    always_selected = False

    def __init__(self, rule_sets: FrozenSet[str], guards: Optional[List[Guard]] = None):
        self.rule_sets = rule_sets
        self.guards: List[Guard] = list(guards or [])

    def guard_allows(self, context: ValidationContext) -> bool:
        """Evaluate when/unless guards against the validator's instance."""
        instance = context.instance_to_validate
        for predicate, polarity in self.guards:
            passed = bool(call_flexible(predicate, instance, context))
            if passed != (polarity == WHEN):
                return False
        return True

    def evaluate(self, context: ValidationContext, instance: Any, default_cascade: CascadeMode) -> None:
        raise NotImplementedError


class RuleComponent:
    """An atomic rule attached to a chain, with its per-rule options"""

    def __init__(self, rule: BaseRule):
        self.rule = rule
        self.message_override: Optional[MessageSource] = None
        self.error_code: Optional[str] = None
        self.severity: Severity = Severity.ERROR

    def evaluate(
        self,
        chain: "RuleChain",
        context: ValidationContext,
        instance: Any,
        value: Any,
        index: Optional[int],
        cascade: CascadeMode
    ) -> bool:
        if self.rule.is_valid(value, context):
            return True

        formatter = MessageFormatter(self.rule.failure_placeholders(value))
        formatter.append("PropertyName", chain.display_name(context))
        formatter.append("PropertyValue", value)
        formatter.append("PropertyPath", context.property_path())
        if index is not None:
            formatter.append("CollectionIndex", index)

        override = None
        if self.message_override is not None:
            source = self.message_override
            if callable(source):
                override = lambda: call_flexible(source, instance, value)
            else:
                override = lambda: source

        error_code = self.error_code or self.rule.code
        message = resolve_message(
            override,
            error_code,
            self.rule.default_message,
            formatter,
            context.options.language_manager,
            context.options.culture,
        )
        context.add_failure(ValidationFailure(
            property_path=context.property_path(),
            message=message,
            attempted_value=value,
            error_code=error_code,
            severity=self.severity,
            placeholders=dict(formatter.placeholders),
        ))
        return False


class ChildValidatorComponent:
    """Delegates a nested object to another validator"""

    def __init__(self, validator: "Validator"):
        self.validator = validator

    def evaluate(self, chain, context, instance, value, index, cascade) -> bool:
        if value is None:
            return True
        before = len(context.failures)
        with context.validating(value):
            self.validator.validate_into(context, value)
        return len(context.failures) == before


class ForEachComponent:
    """Runs an element chain for every item of a collection value"""

    def __init__(self, element_chain: "RuleChain"):
        self.element_chain = element_chain

    def evaluate(self, chain, context, instance, value, index, cascade) -> bool:
        if value is None:
            return True
        passed = True
        for position, element in enumerate(value):
            with context.enter(position):
                passed &= self.element_chain.run_components(context, instance, element, position, cascade)
        return passed


class RuleChain(ChainBase):
    """
    Ordered components for one property.

    A collection chain (``rule_for_each``) runs its components once per
    element and renders the path as ``property[index]``.
    """

    def __init__(
        self,
        property_name: str,
        accessor: Callable[[Any], Any],
        rule_sets: FrozenSet[str],
        guards: Optional[List[Guard]] = None,
        is_collection: bool = False,
        parent: Optional["RuleChain"] = None
    ):
        super().__init__(rule_sets, guards)
        self.property_name = property_name
        self.accessor = accessor
        self.is_collection = is_collection
        self.parent = parent
        self.components: List[Any] = []
        self.cascade_mode: Optional[CascadeMode] = None
        self.custom_display_name: Optional[str] = None
        self.path_name: str = property_name

    def display_name(self, context: ValidationContext) -> str:
        if self.custom_display_name is not None:
            return self.custom_display_name
        if self.parent is not None:
            return self.parent.display_name(context)
        return context.options.display_name_resolver(self.property_name)

    def evaluate(self, context: ValidationContext, instance: Any, default_cascade: CascadeMode) -> None:
        if not self.guard_allows(context):
            return

        cascade = self.cascade_mode or default_cascade
        value = self.accessor(instance)

        if not self.is_collection:
            with context.enter(self.path_name):
                self.run_components(context, instance, value, None, cascade)
            return

        if value is None:
            return
        for position, element in enumerate(value):
            with context.enter(self.path_name, position):
                self.run_components(context, instance, element, position, cascade)

    def run_components(
        self,
        context: ValidationContext,
        instance: Any,
        value: Any,
        index: Optional[int],
        inherited_cascade: CascadeMode
    ) -> bool:
        """
        Evaluate components in order, honouring the cascade mode.

        Returns:
            True if every evaluated component passed
        """
        cascade = self.cascade_mode or inherited_cascade
        passed = True
        for component in self.components:
            if component.evaluate(self, context, instance, value, index, cascade):
                continue
            passed = False
            if cascade == CascadeMode.STOP:
                break
        return passed


class IncludeChain(ChainBase):
    """
    Runs another validator's rules against the same instance.

    The include itself is never filtered out. The included validator's
    default chains take on the rule sets the include was declared in,
    and its own named rule sets are selected as usual.
    """

    always_selected = True

    def __init__(self, validator: "Validator", rule_sets: FrozenSet[str], guards: Optional[List[Guard]] = None):
        super().__init__(rule_sets, guards)
        self.validator = validator

    def evaluate(self, context: ValidationContext, instance: Any, default_cascade: CascadeMode) -> None:
        if not self.guard_allows(context):
            return
        with context.inheriting(context.effective_rule_sets(self.rule_sets)):
            self.validator.validate_into(context, instance)


class RuleBuilder:
    """
    Fluent handle for declaring the rules of one chain.

    Any rule registered in the rule registry is available as a method:

        validator.rule_for("Age").greater_than(5).less_than(100)
        validator.rule_for("Name").not_empty().with_message("Name can not be empty!")
    """

    def __init__(self, chain: RuleChain, in_collection: bool = False):
        self.chain = chain
        self.in_collection = in_collection or chain.is_collection

    def __getattr__(self, name: str) -> Callable[..., "RuleBuilder"]:
        if name.startswith("_") or not is_registered(name):
            raise AttributeError(
                f"'{type(self).__name__}' has no attribute '{name}' "
                f"and no rule named '{name}' is registered"
            )

        def add_registered_rule(*args: Any, **kwargs: Any) -> "RuleBuilder":
            return self.rule(name, *args, **kwargs)

        add_registered_rule.__name__ = name
        return add_registered_rule

    # Rules

    def rule(self, name: str, *args: Any, **kwargs: Any) -> "RuleBuilder":
        """Attach a registered rule by name."""
        return self.add_rule(create_rule(name, *args, **kwargs))

    def add_rule(self, rule: BaseRule) -> "RuleBuilder":
        """Attach a rule instance."""
        if not isinstance(rule, BaseRule):
            raise ConfigurationError(f"Expected a BaseRule instance, got {type(rule).__name__}")
        self.chain.components.append(RuleComponent(rule))
        return self

    def must(self, predicate: Callable[..., Any]) -> "RuleBuilder":
        """Attach an ad-hoc predicate taking ``value`` or ``(value, context)``."""
        return self.add_rule(PredicateValidator(predicate))

    def apply(self, extension: Callable[..., "RuleBuilder"], *args: Any, **kwargs: Any) -> "RuleBuilder":
        """
        Apply a free-function extension ``fn(builder, *args) -> builder``.

        Usage:
            def list_must_contain_fewer_than(builder, num):
                return builder.must(lambda items: len(items) < num).with_message(
                    "The list contains too many items")

            rule_for("Orders").apply(list_must_contain_fewer_than, 10)
        """
        result = extension(self, *args, **kwargs)
        return result if result is not None else self

    # Delegation

    def set_validator(self, validator: "Validator") -> "RuleBuilder":
        """Validate the property (or each element) with a child validator."""
        from fluentrules.engine import Validator

        if isinstance(validator, type) and issubclass(validator, Validator):
            validator = validator()
        if not isinstance(validator, Validator):
            raise ConfigurationError(
                f"set_validator() expects a Validator, got {type(validator).__name__}"
            )
        self.chain.components.append(ChildValidatorComponent(validator))
        return self

    def child_rules(self, configure: Callable[..., Any]) -> "RuleBuilder":
        """
        Declare an inline child validator for the property (or each element).

        The inline chains belong to the same rule sets as this chain.
        """
        from fluentrules.engine import InlineValidator

        return self.set_validator(InlineValidator(
            configure,
            name=f"{self.chain.property_name}ChildRules",
            rule_sets=self.chain.rule_sets,
        ))

    def for_each(self, configure: Callable[["RuleBuilder"], Any]) -> "RuleBuilder":
        """
        Attach per-element rules to a collection-level chain.

        Usage:
            rule_for("Orders").must(lambda o: len(o) <= 10).for_each(
                lambda order: order.must(lambda o: o.id > 0))
        """
        element_chain = RuleChain(
            self.chain.property_name,
            lambda value: value,
            self.chain.rule_sets,
            parent=self.chain,
        )
        element_builder = RuleBuilder(element_chain, in_collection=True)
        call_flexible(configure, element_builder)
        if not element_chain.components:
            raise ConfigurationError(
                f"for_each() on '{self.chain.property_name}' declared no element rules"
            )
        self.chain.components.append(ForEachComponent(element_chain))
        return self

    # Options for the most recent rule

    def with_message(self, message: MessageSource) -> "RuleBuilder":
        """
        Override the message of the most recent rule.

        ``message`` is a template or a callable of ``(instance, value)``
        returning one. Static templates are checked immediately.
        """
        component = self._last_rule("with_message")
        if isinstance(message, str):
            available = STANDARD_PLACEHOLDERS | set(component.rule.placeholders())
            if self.in_collection:
                available |= COLLECTION_PLACEHOLDERS
            check_template(message, available)
        elif not callable(message):
            raise ConfigurationError("with_message() expects a string or a callable")
        component.message_override = message
        return self

    def with_error_code(self, code: str) -> "RuleBuilder":
        if not code:
            raise ConfigurationError("Error code must not be empty")
        self._last_rule("with_error_code").error_code = code
        return self

    def with_severity(self, severity: Union[Severity, str]) -> "RuleBuilder":
        component = self._last_rule("with_severity")
        try:
            component.severity = Severity(severity)
        except ValueError:
            raise ConfigurationError(f"Unknown severity '{severity}'")
        return self

    # Options for the whole chain

    def with_name(self, display_name: str) -> "RuleBuilder":
        """Change the name shown in messages; the property path is unchanged."""
        if not display_name:
            raise ConfigurationError("Display name must not be empty")
        self.chain.custom_display_name = display_name
        return self

    def override_property_name(self, property_name: str) -> "RuleBuilder":
        """Change the rendered property path of failures from this chain."""
        if not property_name:
            raise ConfigurationError("Property name must not be empty")
        self.chain.path_name = property_name
        return self

    def when(self, predicate: Callable[..., Any]) -> "RuleBuilder":
        """Run the chain only if ``predicate(instance[, context])`` is true."""
        return self._add_guard(predicate, WHEN)

    def unless(self, predicate: Callable[..., Any]) -> "RuleBuilder":
        """Skip the chain if ``predicate(instance[, context])`` is true."""
        return self._add_guard(predicate, UNLESS)

    def cascade(self, mode: Union[CascadeMode, str]) -> "RuleBuilder":
        self.chain.cascade_mode = CascadeMode.parse(mode)
        return self

    def _add_guard(self, predicate: Callable[..., Any], polarity: str) -> "RuleBuilder":
        if not callable(predicate):
            raise ConfigurationError(f"{polarity}() expects a callable predicate")
        if self.chain.parent is not None:
            raise ConfigurationError(f"{polarity}() belongs on the collection chain, not inside for_each()")
        self.chain.guards.append((predicate, polarity))
        return self

    def _last_rule(self, method: str) -> RuleComponent:
        if not self.chain.components or not isinstance(self.chain.components[-1], RuleComponent):
            raise ConfigurationError(
                f"{method}() on '{self.chain.property_name}' must follow a rule"
            )
        return self.chain.components[-1]
