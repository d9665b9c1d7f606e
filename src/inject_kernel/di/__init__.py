from .context import get_injector, reset_injector, set_injector
from .errors import InjectionError, NotAnInterfaceError, NotInvocableError, ResolutionError, WitnessError
from .inject import Inject, apply, injected, invoke
from .registry import Binding, Injector, new
from .types import implements, interface_of, is_interface

__all__ = [
    "Binding",
    "Inject",
    "Injector",
    "InjectionError",
    "NotAnInterfaceError",
    "NotInvocableError",
    "ResolutionError",
    "WitnessError",
    "apply",
    "get_injector",
    "implements",
    "injected",
    "interface_of",
    "invoke",
    "is_interface",
    "new",
    "reset_injector",
    "set_injector",
]
