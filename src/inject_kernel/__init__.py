# inject_kernel/__init__.py
"""
inject_kernel
──────────────────────────────────────────────────────────────
A type-keyed dependency injection kernel.
Provides:
    - Injector: register values by type or interface, resolve with
      parent fallback
    - Field population (apply) and argument injection (invoke)
    - Context-bound injectors and autowired services
    - Optional FastAPI integration (inject_kernel.web)
──────────────────────────────────────────────────────────────
"""

__version__ = "0.1.0"

from inject_kernel.di import (
    Binding,
    Inject,
    InjectionError,
    Injector,
    NotAnInterfaceError,
    NotInvocableError,
    ResolutionError,
    WitnessError,
    get_injector,
    injected,
    interface_of,
    new,
)
from inject_kernel.services.base_service import BaseService

__all__ = [
    "BaseService",
    "Binding",
    "Inject",
    "InjectionError",
    "Injector",
    "NotAnInterfaceError",
    "NotInvocableError",
    "ResolutionError",
    "WitnessError",
    "get_injector",
    "injected",
    "interface_of",
    "new",
]
