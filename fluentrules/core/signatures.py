"""
Helpers for calling user callables with a variable number of arguments.

Predicates, guards and message factories may be written as ``f(value)`` or
``f(value, context)``; the engine passes as many arguments as they accept.
"""

import inspect
from typing import Any, Callable


def positional_arity(fn: Callable[..., Any]) -> int:
    """
    Count how many positional arguments ``fn`` accepts.

    Returns -1 when the callable takes ``*args``. Builtins whose signature
    cannot be inspected are treated as single-argument callables.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return 1

    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind == inspect.Parameter.VAR_POSITIONAL:
            return -1
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def call_flexible(fn: Callable[..., Any], *args: Any) -> Any:
    """Call ``fn`` with the leading ``args`` it accepts."""
    arity = positional_arity(fn)
    if arity < 0 or arity >= len(args):
        return fn(*args)
    return fn(*args[:arity])
