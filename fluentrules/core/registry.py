"""
Rule registry system.

Provides decorator-based registration for rules and retrieval functions.
Registered rules become builder methods (``rule_for("Name").not_empty()``),
so new rules plug in without modifying core code.
"""

from typing import Any, Callable, Dict, Optional, Sequence, Type
from fluentrules.core.base import BaseRule, ConfigurationError
from fluentrules.core.signatures import call_flexible
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

# Global registry of all rule factories
RULE_REGISTRY: Dict[str, Callable[..., BaseRule]] = {}


def register_rule(name: str):
    """
    Decorator to register a rule class in the global registry.

    Usage:
        @register_rule("not_empty")
        class NotEmptyValidator(BaseRule):
            def is_valid(self, value, context):
                ...

    Args:
        name: Unique name for the rule (used as builder method name)

    Returns:
        Decorator function
    """
    def decorator(cls: Type[BaseRule]):
        _store(name, cls)
        return cls

    return decorator


def register_predicate(
    name: str,
    message: str,
    code: Optional[str] = None,
    params: Sequence[str] = ()
):
    """
    Decorator to register a plain predicate function as a named rule.

    The function receives the value, the validation context and any
    arguments given at declaration time. ``params`` names those arguments
    so they can be used as message placeholders.

    Usage:
        @register_predicate(
            "fewer_than",
            "'{PropertyName}' must contain fewer than {MaxCount} items.",
            params=("MaxCount",),
        )
        def fewer_than(value, context, max_count):
            return value is None or len(value) < max_count

        rule_for("Orders").fewer_than(10)

    Args:
        name: Unique rule name
        message: Default message template
        code: Error code (defaults to CamelCase name + "Validator")
        params: Placeholder names for the declaration-time arguments

    Returns:
        Decorator function
    """
    rule_code = code or _default_code(name)

    def decorator(fn: Callable[..., bool]):
        def factory(*args: Any) -> BaseRule:
            if len(args) != len(params):
                raise ConfigurationError(
                    f"Rule '{name}' expects {len(params)} argument(s), got {len(args)}"
                )
            return FunctionRule(fn, message, rule_code, dict(zip(params, args)))

        factory.__name__ = fn.__name__
        factory.__doc__ = fn.__doc__
        _store(name, factory)
        return fn

    return decorator


class FunctionRule(BaseRule):
    """Rule backed by a registered predicate function"""

    def __init__(
        self,
        predicate: Callable[..., bool],
        message: str,
        code: str,
        arguments: Optional[Dict[str, Any]] = None
    ):
        self.predicate = predicate
        self.default_message = message
        self.error_code = code
        self.arguments = arguments or {}

    def is_valid(self, value, context) -> bool:
        return bool(self.predicate(value, context, *self.arguments.values()))

    def placeholders(self) -> Dict[str, Any]:
        return dict(self.arguments)


class PredicateValidator(BaseRule):
    """
    Ad-hoc rule created by ``must()``.

    The predicate takes either the value alone or the value and the
    validation context.
    """

    default_message = "The specified condition was not met for '{PropertyName}'."

    def __init__(self, predicate: Callable[..., Any]):
        if not callable(predicate):
            raise ConfigurationError("must() requires a callable predicate")
        self.predicate = predicate

    def is_valid(self, value, context) -> bool:
        return bool(call_flexible(self.predicate, value, context))


def get_rule(name: str) -> Optional[Callable[..., BaseRule]]:
    """
    Get rule factory by name from registry.

    Args:
        name: Rule name

    Returns:
        Rule class / factory or None if not found
    """
    return RULE_REGISTRY.get(name)


def create_rule(name: str, *args: Any, **kwargs: Any) -> BaseRule:
    """
    Instantiate a registered rule.

    Args:
        name: Rule name
        *args, **kwargs: Declaration-time arguments for the rule

    Returns:
        Rule instance

    Raises:
        ConfigurationError: If the rule is not registered
    """
    factory = get_rule(name)
    if factory is None:
        raise ConfigurationError(f"Rule '{name}' not found in registry")
    return factory(*args, **kwargs)


def list_rules() -> Dict[str, str]:
    """
    List all registered rules.

    Returns:
        Dictionary mapping rule names to factory names
    """
    return {
        name: factory.__name__
        for name, factory in RULE_REGISTRY.items()
    }


def is_registered(name: str) -> bool:
    """
    Check if a rule is registered.

    Args:
        name: Rule name

    Returns:
        True if registered, False otherwise
    """
    return name in RULE_REGISTRY


def _store(name: str, factory: Callable[..., BaseRule]) -> None:
    if not name.isidentifier() or name.startswith("_"):
        raise ConfigurationError(f"Rule name '{name}' must be a public identifier")

    if name in RULE_REGISTRY:
        logger.warning(
            f"Rule '{name}' is already registered. "
            f"Overwriting with {factory.__name__}"
        )

    RULE_REGISTRY[name] = factory
    logger.debug(f"Registered rule: {name} -> {factory.__name__}")


def _default_code(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_")) + "Validator"
