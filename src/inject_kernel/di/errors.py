# inject_kernel/di/errors.py
"""
Injection error hierarchy
──────────────────────────────────────────────
• ResolutionError     → no binding for a type anywhere in the chain
• WitnessError        → map_to() witness does not name an interface
• NotAnInterfaceError → get_all() called with a concrete type
• NotInvocableError   → invoke()/provide() given a non-callable
──────────────────────────────────────────────
"""
from __future__ import annotations
from typing import Any, Optional


def type_name(type_: Any) -> str:
    """Readable dotted name for classes, plain repr for typing constructs."""
    if isinstance(type_, type):
        if type_.__module__ == "builtins":
            return type_.__qualname__
        return f"{type_.__module__}.{type_.__qualname__}"
    return repr(type_)


class InjectionError(Exception):
    """Base class for every error raised by inject_kernel."""


class ResolutionError(InjectionError, LookupError):
    """
    Raised when a type cannot be resolved.

    `type_` is the unresolved type; `target` names what was being populated
    (a field or parameter), if anything.
    """

    def __init__(self, type_: Any, target: Optional[str] = None):
        self.type_ = type_
        self.target = target
        msg = f"value not found for type {type_name(type_)}"
        if target:
            msg = f"{msg} (required by {target})"
        super().__init__(msg)


class WitnessError(InjectionError, TypeError):
    pass


class NotAnInterfaceError(InjectionError, TypeError):
    pass


class NotInvocableError(InjectionError, TypeError):
    pass
