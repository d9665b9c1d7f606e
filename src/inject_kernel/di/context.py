# inject_kernel/di/context.py
"""
ContextVar-based Injector binding
──────────────────────────────────────────────
• Each request (or task) binds one Injector via InjectorMiddleware
• get_injector() retrieves it; raises if none bound
• reset_injector() restores the previous binding
• set_injector() allows manual binding for CLI/tests
"""
from __future__ import annotations
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING, Optional

from .errors import InjectionError

if TYPE_CHECKING:
    from .registry import Injector

_injector_cv: ContextVar[Optional["Injector"]] = ContextVar("_ik_injector", default=None)


def set_injector(injector: "Injector") -> Token:
    """Bind an Injector to the current context. Keep the token for reset_injector()."""
    return _injector_cv.set(injector)


def get_injector() -> "Injector":
    """Return the current Injector or raise if none bound."""
    injector = _injector_cv.get()
    if injector is None:
        raise InjectionError(
            "No active Injector found. "
            "Did you enable InjectorMiddleware or call set_injector()?"
        )
    return injector


def reset_injector(token: Token) -> None:
    _injector_cv.reset(token)
